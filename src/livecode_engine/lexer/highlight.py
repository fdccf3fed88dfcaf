"""Theme-driven mapping from tokens to styled spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .tokens import Token, TokenType


@dataclass(frozen=True, slots=True)
class TokenStyle:
    color: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True, slots=True)
class Theme:
    name: str
    default: TokenStyle
    styles: Mapping[TokenType, TokenStyle] = field(default_factory=dict)
    background: str = "#1f2937"

    def __post_init__(self) -> None:
        object.__setattr__(self, "styles", MappingProxyType(dict(self.styles)))

    def style_for(self, token_type: TokenType) -> TokenStyle:
        return self.styles.get(token_type, self.default)


@dataclass(frozen=True, slots=True)
class StyledSpan:
    text: str
    token_type: TokenType
    color: str
    bold: bool = False
    italic: bool = False


DARK_THEME = Theme(
    name="dark",
    default=TokenStyle("#f3f4f6"),
    background="#1f2937",
    styles={
        TokenType.KEYWORD: TokenStyle("#c084fc", bold=True),
        TokenType.STRING: TokenStyle("#fcd34d"),
        TokenType.NUMBER: TokenStyle("#fb923c"),
        TokenType.COMMENT: TokenStyle("#86efac", italic=True),
        TokenType.IDENTIFIER: TokenStyle("#e5e7eb"),
        TokenType.BUILTIN: TokenStyle("#22d3ee"),
        TokenType.FUNCTION: TokenStyle("#60a5fa"),
        TokenType.CONSTANT: TokenStyle("#f472b6"),
        TokenType.OPERATOR: TokenStyle("#94a3b8"),
        TokenType.BRACKET: TokenStyle("#facc15"),
    },
)

LIGHT_THEME = Theme(
    name="light",
    default=TokenStyle("#111827"),
    background="#ffffff",
    styles={
        TokenType.KEYWORD: TokenStyle("#7c3aed", bold=True),
        TokenType.STRING: TokenStyle("#b45309"),
        TokenType.NUMBER: TokenStyle("#c2410c"),
        TokenType.COMMENT: TokenStyle("#15803d", italic=True),
        TokenType.IDENTIFIER: TokenStyle("#1f2937"),
        TokenType.BUILTIN: TokenStyle("#0e7490"),
        TokenType.FUNCTION: TokenStyle("#1e40af"),
        TokenType.CONSTANT: TokenStyle("#be185d"),
        TokenType.OPERATOR: TokenStyle("#475569"),
        TokenType.BRACKET: TokenStyle("#a16207"),
    },
)

THEMES: Dict[str, Theme] = {DARK_THEME.name: DARK_THEME, LIGHT_THEME.name: LIGHT_THEME}


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown theme '{name}'") from exc


def highlight(tokens: Iterable[Token], theme: Theme = DARK_THEME) -> List[StyledSpan]:
    spans: List[StyledSpan] = []
    for token in tokens:
        style = theme.style_for(token.type)
        spans.append(
            StyledSpan(
                text=token.value,
                token_type=token.type,
                color=style.color,
                bold=style.bold,
                italic=style.italic,
            )
        )
    return spans


__all__ = [
    "TokenStyle",
    "Theme",
    "StyledSpan",
    "DARK_THEME",
    "LIGHT_THEME",
    "THEMES",
    "get_theme",
    "highlight",
]
