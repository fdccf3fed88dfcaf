"""Single-pass, lossless tokenizer used for highlighting.

Every character of the input lands in exactly one token, so joining the token
values gives back the original text. Malformed input (unterminated strings or
comments) never raises; the offending literal just runs as far as it can.
"""

from __future__ import annotations

from typing import List, Optional

from .profiles import BRACKET_CHARS, PYTHON, LanguageProfile
from .tokens import Token, TokenType

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class Tokenizer:
    """Scans ``text`` left to right applying the rules in precedence order."""

    def __init__(self, text: str, profile: LanguageProfile = PYTHON) -> None:
        self.text = text
        self.profile = profile
        self.pos = 0

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        text = self.text
        while self.pos < len(text):
            start = self.pos
            token_type = self._scan()
            tokens.append(Token(token_type, text[start : self.pos]))
        return tokens

    def _scan(self) -> TokenType:
        profile = self.profile
        text = self.text
        char = text[self.pos]

        if profile.line_comment and text.startswith(profile.line_comment, self.pos):
            end = text.find("\n", self.pos)
            self.pos = len(text) if end == -1 else end
            return TokenType.COMMENT

        if profile.block_comment and text.startswith(profile.block_comment[0], self.pos):
            opener, closer = profile.block_comment
            end = text.find(closer, self.pos + len(opener))
            self.pos = len(text) if end == -1 else end + len(closer)
            return TokenType.COMMENT

        delimiter = self._match_template()
        if delimiter is not None:
            self.pos = self._scan_delimited(delimiter, multiline=True)
            return TokenType.STRING

        if char in profile.quotes:
            self.pos = self._scan_delimited(char, multiline=False)
            return TokenType.STRING

        if self._at_number():
            self.pos = self._scan_number()
            return TokenType.NUMBER

        if profile.is_identifier_start(char):
            return self._scan_identifier()

        if char in profile.operator_chars:
            end = self.pos
            limit = min(len(text), self.pos + profile.max_operator_length)
            while end < limit and text[end] in profile.operator_chars:
                end += 1
            self.pos = end
            return TokenType.OPERATOR

        self.pos += 1
        if char in BRACKET_CHARS:
            return TokenType.BRACKET
        return TokenType.PLAIN

    def _match_template(self) -> Optional[str]:
        for delimiter in self.profile.template_delimiters:
            if self.text.startswith(delimiter, self.pos):
                return delimiter
        return None

    def _scan_delimited(self, delimiter: str, *, multiline: bool) -> int:
        text = self.text
        index = self.pos + len(delimiter)
        while index < len(text):
            char = text[index]
            if char == "\\":
                # An escaped newline still ends a single-line string.
                if not multiline and text.startswith("\n", index + 1):
                    return index + 1
                index += 2
                continue
            if char == "\n" and not multiline:
                return index
            if text.startswith(delimiter, index):
                return index + len(delimiter)
            index += 1
        return len(text)

    def _at_number(self) -> bool:
        text = self.text
        char = text[self.pos]
        if char.isdigit() and char.isascii():
            return True
        return char == "." and _is_digit_at(text, self.pos + 1)

    def _scan_number(self) -> int:
        text = self.text
        start = self.pos
        prefix = self.profile.hex_prefix
        if (
            prefix
            and text[start : start + len(prefix)].lower() == prefix.lower()
            and start + len(prefix) < len(text)
            and text[start + len(prefix)] in HEX_DIGITS
        ):
            index = start + len(prefix)
            while index < len(text) and text[index] in HEX_DIGITS:
                index += 1
            return index

        index = start
        seen_point = False
        while index < len(text):
            char = text[index]
            if _is_digit_at(text, index):
                index += 1
            elif char == "." and not seen_point and _is_digit_at(text, index + 1):
                seen_point = True
                index += 1
            else:
                break

        if index < len(text) and text[index] in "eE":
            exponent = index + 1
            if exponent < len(text) and text[exponent] in "+-":
                exponent += 1
            if _is_digit_at(text, exponent):
                index = exponent
                while _is_digit_at(text, index):
                    index += 1
        return index

    def _scan_identifier(self) -> TokenType:
        text = self.text
        profile = self.profile
        start = self.pos
        index = start + 1
        while index < len(text) and profile.is_identifier_part(text[index]):
            index += 1
        self.pos = index
        word = text[start:index]

        if word in profile.keywords:
            return TokenType.KEYWORD
        if word in profile.constants:
            return TokenType.CONSTANT
        if word in profile.builtins:
            return TokenType.BUILTIN
        if text.startswith("(", index):
            return TokenType.FUNCTION
        return TokenType.IDENTIFIER


def _is_digit_at(text: str, index: int) -> bool:
    return index < len(text) and text[index].isascii() and text[index].isdigit()


def tokenize(text: str, profile: LanguageProfile = PYTHON) -> List[Token]:
    """Return the lossless token stream for ``text``."""

    return Tokenizer(text, profile).tokenize()


def tokenize_lines(text: str, profile: LanguageProfile = PYTHON) -> List[List[Token]]:
    """Group tokens per line for line-oriented renderers.

    Tokens that cross a newline (block comments, multi-line strings) are split
    into one piece per line and the newline characters themselves are dropped,
    so ``"\\n".join`` over the per-line text gives back ``text``.
    """

    lines: List[List[Token]] = [[]]
    for token in tokenize(text, profile):
        pieces = token.value.split("\n")
        for number, piece in enumerate(pieces):
            if number:
                lines.append([])
            if piece:
                lines[-1].append(Token(token.type, piece))
    return lines


__all__ = ["Tokenizer", "tokenize", "tokenize_lines"]
