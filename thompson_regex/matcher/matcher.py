# thompson_regex/matcher/matcher.py

from typing import Iterable, List

import numpy as np
import pandas as pd

from thompson_regex.matcher import bitset
from thompson_regex.matcher.automata import Automaton
from thompson_regex.utils.logging_config import get_logger

logger = get_logger(__name__)


def matches(automaton: Automaton, text: str) -> bool:
    """
    Decide whether ``automaton`` accepts the whole of ``text``.

    The simulation keeps the set of active states as a bit-set. Each input
    symbol moves every active state along its column of the transition
    table, and the result is widened by the precomputed epsilon-closures.
    The match fails as soon as a symbol is missing from the alphabet or no
    state stays active.

    Args:
        automaton: A compiled automaton
        text: The input string

    Returns:
        bool: True if the automaton ends in an accept state after consuming
              every character, False otherwise

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Input must be a string, got {type(text).__name__}")

    current = automaton.epsilon_closures[automaton.start_state]

    for position, symbol in enumerate(text):
        column = automaton.alphabet.column(symbol)
        if column is None:
            logger.debug(f"Symbol {symbol!r} at position {position} is not in the alphabet")
            return False

        active = bitset.members(current)
        moved = bitset.union_rows(automaton.transitions[active, column])
        current = bitset.union_rows(automaton.epsilon_closures[bitset.members(moved)])

        if bitset.is_empty(current):
            logger.debug(f"No active states left after position {position}")
            return False

    return automaton.is_accepting(current)


class NFAMatcher:
    """
    Reusable matcher bound to one compiled automaton.

    Matching never mutates the automaton, so any number of matchers may
    share it.
    """

    def __init__(self, automaton: Automaton):
        self.automaton = automaton

    def match(self, text: str) -> bool:
        return matches(self.automaton, text)

    def match_many(self, texts: Iterable[str]) -> List[bool]:
        """Match every string of ``texts`` in order."""
        return [matches(self.automaton, text) for text in texts]

    def match_series(self, series: pd.Series) -> pd.Series:
        """
        Match every value of a pandas Series.

        Args:
            series: Series of strings; missing values (None, NaN, NA) count
                    as non-matches

        Returns:
            Boolean Series with the same index and name as ``series``
        """
        values = np.fromiter(
            (False if _is_missing(value) else matches(self.automaton, value) for value in series),
            dtype=bool,
            count=len(series),
        )
        return pd.Series(values, index=series.index, name=series.name, dtype=bool)

    def __call__(self, text: str) -> bool:
        return self.match(text)

    def __repr__(self) -> str:
        return f"NFAMatcher({self.automaton!r})"


def _is_missing(value) -> bool:
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))
