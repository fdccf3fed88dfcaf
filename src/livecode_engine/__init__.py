"""Live code editor engine: tokenizer, editing state machine and sandbox."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "editing",
    "keymaps",
    "lexer",
    "output",
    "runtime",
    "sandbox",
    "session",
    "templates",
]

__version__ = "0.1.0"
