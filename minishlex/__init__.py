"""Tokenizer, token classifier and syntax-tree builder for a small shell command language."""

__version__ = "0.1.0"
__all__ = ["lexer", "nodes", "parser", "pipeline", "quotes", "tokens"]