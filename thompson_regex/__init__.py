"""
Whole-string regular expression matching with Thompson NFAs.

Patterns support literals, concatenation (implicit or with ``.``),
alternation ``|``, ``*``, ``+``, ``?``, grouping and ``\\``-escaped
literals. A pattern is tokenized, converted to postfix with the Shunting
Yard algorithm, built into an NFA with Thompson's construction and frozen
into a dense bit-set transition table for simulation.

    >>> import thompson_regex
    >>> automaton = thompson_regex.compile("(ab)*c")
    >>> thompson_regex.matches(automaton, "ababc")
    True
"""

from .errors import (
    RegexError, MalformedPatternError, PatternSyntaxError, UnbalancedPatternError,
    EmptyPatternError, MissingOperandError, CapacityExceededError
)
from .config import RegexConfig, LimitsConfig, PerformanceConfig
from .parser import Token, TokenType
from .matcher import Alphabet, Automaton, NFAMatcher
from .executor import compile, to_postfix, format_postfix, matches
from .utils import setup_logging, get_cache_stats, clear_pattern_cache, set_caching_enabled

__version__ = "0.1.0"

__all__ = [
    'compile',
    'to_postfix',
    'format_postfix',
    'matches',
    'Automaton',
    'Alphabet',
    'NFAMatcher',
    'Token',
    'TokenType',
    'RegexConfig',
    'LimitsConfig',
    'PerformanceConfig',
    'RegexError',
    'MalformedPatternError',
    'PatternSyntaxError',
    'UnbalancedPatternError',
    'EmptyPatternError',
    'MissingOperandError',
    'CapacityExceededError',
    'setup_logging',
    'get_cache_stats',
    'clear_pattern_cache',
    'set_caching_enabled'
]
