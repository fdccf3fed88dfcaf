"""Token types produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class TokenType(str, Enum):
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    IDENTIFIER = "identifier"
    BUILTIN = "builtin"
    FUNCTION = "function"
    CONSTANT = "constant"
    OPERATOR = "operator"
    BRACKET = "bracket"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str


def join_tokens(tokens: Iterable[Token]) -> str:
    """Rebuild the scanned text; tokenizing is lossless so this is the input."""

    return "".join(token.value for token in tokens)


__all__ = ["Token", "TokenType", "join_tokens"]
