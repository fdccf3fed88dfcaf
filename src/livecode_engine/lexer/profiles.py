"""Lexical profiles describing each highlighted language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

BRACKET_CHARS = frozenset("()[]{}")


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Everything the tokenizer and editor need to know about a language.

    ``template_delimiters`` are string delimiters allowed to span newlines;
    ``quotes`` are single-line string delimiters. ``identifier_extras`` are the
    non-alphanumeric characters legal inside identifiers.
    """

    name: str
    line_comment: str
    block_comment: Optional[Tuple[str, str]] = None
    template_delimiters: Tuple[str, ...] = ()
    quotes: Tuple[str, ...] = ('"', "'")
    hex_prefix: str = "0x"
    identifier_extras: str = "_"
    keywords: FrozenSet[str] = field(default_factory=frozenset)
    constants: FrozenSet[str] = field(default_factory=frozenset)
    builtins: FrozenSet[str] = field(default_factory=frozenset)
    operator_chars: FrozenSet[str] = field(default_factory=frozenset)
    block_openers: Tuple[str, ...] = ("{", "[", "(")
    max_operator_length: int = 3

    def is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char in self.identifier_extras

    def is_identifier_part(self, char: str) -> bool:
        return char.isalnum() or char in self.identifier_extras


PYTHON = LanguageProfile(
    name="python",
    line_comment="#",
    template_delimiters=('"""', "'''"),
    identifier_extras="_",
    keywords=frozenset(
        """
        and as assert async await break class continue def del elif else except
        finally for from global if import in is lambda nonlocal not or pass
        raise return try while with yield
        """.split()
    ),
    constants=frozenset({"True", "False", "None", "Ellipsis", "NotImplemented"}),
    builtins=frozenset(
        """
        abs all any bool bytes callable chr dict dir divmod enumerate filter float
        format frozenset getattr hasattr hash hex id input int isinstance
        issubclass iter len list map max min next object oct open ord pow print
        range repr reversed round set setattr slice sorted str sum super tuple
        type vars zip console Exception ValueError TypeError KeyError
        IndexError RuntimeError ZeroDivisionError AttributeError NameError
        StopIteration
        """.split()
    ),
    operator_chars=frozenset("+-*/%=<>!&|^~@:."),
    block_openers=("{", "[", "(", ":"),
)

JAVASCRIPT = LanguageProfile(
    name="javascript",
    line_comment="//",
    block_comment=("/*", "*/"),
    template_delimiters=("`",),
    identifier_extras="_$",
    keywords=frozenset(
        """
        async await break case catch class const continue debugger default
        delete do else export extends finally for function if import in
        instanceof let new of return static super switch this throw try typeof
        var void while with yield
        """.split()
    ),
    constants=frozenset({"true", "false", "null", "undefined", "NaN", "Infinity"}),
    builtins=frozenset(
        """
        console Math JSON Object Array String Number Boolean Promise Date RegExp
        Map Set WeakMap WeakSet Symbol Error TypeError RangeError parseInt
        parseFloat isNaN isFinite setTimeout setInterval clearTimeout
        clearInterval window document globalThis
        """.split()
    ),
    operator_chars=frozenset("+-*/%=<>!&|^~?:."),
)

PROFILES: Dict[str, LanguageProfile] = {
    PYTHON.name: PYTHON,
    JAVASCRIPT.name: JAVASCRIPT,
    "js": JAVASCRIPT,
    "py": PYTHON,
}


def get_profile(name: str) -> LanguageProfile:
    try:
        return PROFILES[name.lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown language profile '{name}'") from exc


__all__ = [
    "BRACKET_CHARS",
    "LanguageProfile",
    "PYTHON",
    "JAVASCRIPT",
    "PROFILES",
    "get_profile",
]
