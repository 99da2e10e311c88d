"""
Compiled non-deterministic finite automata.

An Automaton is the frozen form of a Thompson construction: a dense
transition table indexed by ``[state, alphabet column]`` whose cells are
state sets, plus the epsilon-closure of every state computed once up front.
All arrays are read-only, so one Automaton can be shared freely between
callers and threads.

Layout:
- ``transitions``: ``uint64`` array of shape ``(states, columns, words)``
- ``epsilon_closures``: ``uint64`` array of shape ``(states, words)``
- ``accept_states``: ``uint64`` array of shape ``(words,)``
"""

from collections import defaultdict
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from thompson_regex.matcher import bitset
from thompson_regex.matcher.alphabet import EPSILON, EPSILON_COLUMN, Alphabet
from thompson_regex.matcher.thompson import Fragment, StatesManager
from thompson_regex.utils.logging_config import get_logger, PerformanceTimer

logger = get_logger(__name__)

EPSILON_LABEL = "ε"


class Automaton:
    """
    Immutable NFA ready for simulation.

    Attributes:
        start_state: Id of the start state
        accept_states: State set of accepting states
        transitions: Dense transition table of state sets
        epsilon_closures: Epsilon-closure state set of every state
        alphabet: Frozen alphabet mapping symbols to table columns
        max_states: State limit the automaton was built under
    """

    def __init__(self, start_state: int, accept_states: np.ndarray, transitions: np.ndarray,
                 epsilon_closures: np.ndarray, alphabet: Alphabet, max_states: int):
        state_count, column_count, word_count = transitions.shape

        if not (0 <= start_state < state_count):
            raise ValueError(f"Start state index {start_state} out of range [0, {state_count})")
        if column_count != len(alphabet):
            raise ValueError(
                f"Transition table has {column_count} columns but alphabet has {len(alphabet)} symbols"
            )
        if epsilon_closures.shape != (state_count, word_count):
            raise ValueError(f"Epsilon closure table has shape {epsilon_closures.shape}")
        if accept_states.shape != (word_count,):
            raise ValueError(f"Accept state set has shape {accept_states.shape}")

        for array in (accept_states, transitions, epsilon_closures):
            array.setflags(write=False)

        self.start_state = start_state
        self.accept_states = accept_states
        self.transitions = transitions
        self.epsilon_closures = epsilon_closures
        self.alphabet = alphabet if alphabet.frozen else alphabet.freeze()
        self.max_states = max_states

    @classmethod
    def from_builder(cls, fragment: Fragment, manager: StatesManager) -> "Automaton":
        """
        Freeze a finished Thompson construction into an Automaton.

        The manager is sealed afterwards; it must not be reused.

        Args:
            fragment: Fragment spanning the whole expression
            manager: The states manager the fragment was built with

        Returns:
            The compiled automaton

        Raises:
            RuntimeError: If the manager was already consumed
        """
        if manager.sealed:
            raise RuntimeError("StatesManager has already been compiled into an automaton")

        with PerformanceTimer("automaton_compile"):
            state_count = manager.state_count
            alphabet = manager.alphabet.freeze()
            word_count = bitset.words_for(state_count)

            transitions = np.zeros((state_count, len(alphabet), word_count), dtype=bitset.WORD_DTYPE)
            for from_state, symbol, to_state in manager.transitions:
                bitset.add(transitions[from_state, alphabet.column(symbol)], to_state)

            accept_states = bitset.from_states([fragment.end], word_count)
            epsilon_closures = _compute_epsilon_closures(manager, word_count)

            manager.seal()

        automaton = cls(
            start_state=fragment.start,
            accept_states=accept_states,
            transitions=transitions,
            epsilon_closures=epsilon_closures,
            alphabet=alphabet,
            max_states=manager.max_states,
        )
        logger.debug(
            f"Compiled automaton: {automaton.state_count} states, "
            f"{automaton.column_count} columns, {automaton.word_count} words per state set"
        )
        return automaton

    @property
    def state_count(self) -> int:
        return self.transitions.shape[0]

    @property
    def column_count(self) -> int:
        return self.transitions.shape[1]

    @property
    def word_count(self) -> int:
        return self.transitions.shape[2]

    def accepting_states(self) -> List[int]:
        return bitset.to_list(self.accept_states)

    def epsilon_closure(self, state: int) -> List[int]:
        """Sorted ids of the states reachable from ``state`` through epsilon moves only."""
        return bitset.to_list(self.epsilon_closures[state])

    def destinations(self, state: int, symbol: str) -> List[int]:
        """Direct (non-closed) destinations of ``state`` on ``symbol``."""
        column = self.alphabet.column(symbol)
        if column is None:
            return []
        return bitset.to_list(self.transitions[state, column])

    def is_accepting(self, state_set: np.ndarray) -> bool:
        return bitset.intersects(state_set, self.accept_states)

    def to_frame(self) -> pd.DataFrame:
        """
        Render the transition table as a DataFrame.

        Rows are state ids, columns are alphabet symbols in column order
        (epsilon shown as ``ε``), and each cell lists the destination states.
        """
        columns = [EPSILON_LABEL if symbol == EPSILON else symbol for symbol in self.alphabet.symbols]
        cells = np.empty((self.state_count, self.column_count), dtype=object)
        for state in range(self.state_count):
            for column in range(self.column_count):
                cells[state, column] = bitset.to_list(self.transitions[state, column])
        return pd.DataFrame(cells, columns=columns, index=pd.RangeIndex(self.state_count, name="state"))

    def get_debug_info(self) -> Dict[str, Any]:
        """Get a summary of the automaton for logging and diagnostics."""
        edge_count = sum(
            bitset.count(self.transitions[state, column])
            for state in range(self.state_count)
            for column in range(self.column_count)
        )
        epsilon_edges = sum(
            bitset.count(self.transitions[state, EPSILON_COLUMN])
            for state in range(self.state_count)
        )
        return {
            'start_state': self.start_state,
            'accept_states': self.accepting_states(),
            'state_count': self.state_count,
            'max_states': self.max_states,
            'alphabet': [EPSILON_LABEL if s == EPSILON else s for s in self.alphabet.symbols],
            'word_count': self.word_count,
            'transition_count': edge_count,
            'epsilon_transition_count': epsilon_edges,
        }

    def __repr__(self) -> str:
        return (f"Automaton(states={self.state_count}, start={self.start_state}, "
                f"accept={self.accepting_states()}, alphabet={self.alphabet!r})")


def _compute_epsilon_closures(manager: StatesManager, word_count: int) -> np.ndarray:
    """Depth-first epsilon reachability for every state, the state itself included."""
    epsilon_edges: Dict[int, List[int]] = defaultdict(list)
    for from_state, symbol, to_state in manager.transitions:
        if symbol == EPSILON:
            epsilon_edges[from_state].append(to_state)

    closures = np.zeros((manager.state_count, word_count), dtype=bitset.WORD_DTYPE)
    for state in manager.states:
        visited = set()
        stack = [state]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            stack.extend(target for target in epsilon_edges[current] if target not in visited)
        for reached in visited:
            bitset.add(closures[state], reached)
    return closures
