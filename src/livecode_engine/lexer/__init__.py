"""Tokenizer, language profiles and highlighter."""

from .highlight import (
    DARK_THEME,
    LIGHT_THEME,
    StyledSpan,
    Theme,
    TokenStyle,
    get_theme,
    highlight,
)
from .profiles import JAVASCRIPT, PYTHON, LanguageProfile, get_profile
from .tokenizer import Tokenizer, tokenize, tokenize_lines
from .tokens import Token, TokenType, join_tokens

__all__ = [
    "Token",
    "TokenType",
    "join_tokens",
    "Tokenizer",
    "tokenize",
    "tokenize_lines",
    "LanguageProfile",
    "PYTHON",
    "JAVASCRIPT",
    "get_profile",
    "Theme",
    "TokenStyle",
    "StyledSpan",
    "DARK_THEME",
    "LIGHT_THEME",
    "get_theme",
    "highlight",
]
