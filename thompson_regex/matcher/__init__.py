# thompson_regex/matcher/__init__.py

from .alphabet import EPSILON, Alphabet
from . import bitset
from .thompson import Transition, Fragment, StatesManager, ThompsonBuilder
from .automata import Automaton
from .matcher import matches, NFAMatcher

__all__ = [
    'EPSILON',
    'Alphabet',
    'bitset',
    'Transition',
    'Fragment',
    'StatesManager',
    'ThompsonBuilder',
    'Automaton',
    'matches',
    'NFAMatcher'
]
