"""
State sets as blocks of 64-bit words.

A state set over ``n`` states is a one-dimensional ``uint64`` array of
``words_for(n)`` words; bit ``i & 63`` of word ``i >> 6`` is set when state
``i`` is a member. Tables of state sets simply add leading dimensions, so a
whole row of destinations can be merged with a single bitwise reduction.
"""

from typing import Iterable, List

import numpy as np

WORD_BITS = 64
WORD_DTYPE = np.uint64


def words_for(state_count: int) -> int:
    """Number of words needed to hold ``state_count`` states (at least one)."""
    return max(1, (state_count + WORD_BITS - 1) // WORD_BITS)


def empty(word_count: int) -> np.ndarray:
    return np.zeros(word_count, dtype=WORD_DTYPE)


def add(words: np.ndarray, state: int) -> None:
    """Set the bit of ``state`` in place."""
    words[state // WORD_BITS] |= WORD_DTYPE(1) << WORD_DTYPE(state % WORD_BITS)


def from_states(states: Iterable[int], word_count: int) -> np.ndarray:
    words = empty(word_count)
    for state in states:
        add(words, state)
    return words


def contains(words: np.ndarray, state: int) -> bool:
    word = words[state // WORD_BITS]
    return bool((word >> WORD_DTYPE(state % WORD_BITS)) & WORD_DTYPE(1))


def members(words: np.ndarray) -> np.ndarray:
    """Indices of the set bits, in ascending order."""
    # Force little-endian words so byte order matches bit order.
    as_bytes = np.ascontiguousarray(words, dtype="<u8").view(np.uint8)
    return np.flatnonzero(np.unpackbits(as_bytes, bitorder="little"))


def to_list(words: np.ndarray) -> List[int]:
    return [int(state) for state in members(words)]


def union_rows(rows: np.ndarray) -> np.ndarray:
    """OR together a stack of state sets of shape (k, words); k may be 0."""
    return np.bitwise_or.reduce(rows, axis=0)


def is_empty(words: np.ndarray) -> bool:
    return not words.any()


def intersects(left: np.ndarray, right: np.ndarray) -> bool:
    return bool(np.bitwise_and(left, right).any())


def count(words: np.ndarray) -> int:
    return int(members(words).size)
