# thompson_regex/parser/__init__.py

from .tokenizer import Token, TokenType, classify, tokenize, insert_concatenation
from .shunting_yard import PRECEDENCE, precedence, shunting_yard, format_postfix

__all__ = [
    'Token',
    'TokenType',
    'classify',
    'tokenize',
    'insert_concatenation',
    'PRECEDENCE',
    'precedence',
    'shunting_yard',
    'format_postfix'
]
