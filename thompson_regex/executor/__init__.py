# thompson_regex/executor/__init__.py

from .regex_compiler import compile, to_postfix, format_postfix, matches

__all__ = ['compile', 'to_postfix', 'format_postfix', 'matches']
