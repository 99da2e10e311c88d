import numpy as np
import pandas as pd
import pytest

from thompson_regex.matcher import bitset
from thompson_regex.matcher.alphabet import EPSILON, Alphabet
from thompson_regex.matcher.automata import Automaton
from thompson_regex.matcher.thompson import StatesManager, ThompsonBuilder
from thompson_regex.parser.shunting_yard import shunting_yard
from thompson_regex.parser.tokenizer import tokenize, insert_concatenation


def compile_pattern(pattern, max_states=64):
    manager = StatesManager(max_states=max_states, pattern=pattern)
    postfix = shunting_yard(insert_concatenation(tokenize(pattern)), pattern)
    fragment = ThompsonBuilder(manager).build(postfix)
    return Automaton.from_builder(fragment, manager), manager


class TestAlphabet:
    def test_epsilon_is_column_zero(self):
        alphabet = Alphabet()
        assert alphabet.column(EPSILON) == 0
        assert len(alphabet) == 1

    def test_first_seen_order(self):
        alphabet = Alphabet()
        assert alphabet.add_symbol("z") == 1
        assert alphabet.add_symbol("a") == 2
        assert alphabet.add_symbol("z") == 1
        assert alphabet.add_symbol(EPSILON) == 0
        assert alphabet.symbols == (EPSILON, "z", "a")

    def test_unknown_symbol(self):
        assert Alphabet().column("q") is None

    def test_freeze_returns_read_only_copy(self):
        alphabet = Alphabet()
        alphabet.add_symbol("a")
        frozen = alphabet.freeze()
        assert frozen.frozen and not alphabet.frozen
        assert frozen.column("a") == 1
        with pytest.raises(RuntimeError):
            frozen.add_symbol("b")
        alphabet.add_symbol("b")
        assert "b" not in frozen


class TestBitset:
    def test_words_for(self):
        assert bitset.words_for(0) == 1
        assert bitset.words_for(64) == 1
        assert bitset.words_for(65) == 2

    def test_members_across_words(self):
        words = bitset.from_states([0, 5, 63, 64, 130], bitset.words_for(131))
        assert bitset.to_list(words) == [0, 5, 63, 64, 130]
        assert bitset.contains(words, 63)
        assert not bitset.contains(words, 62)
        assert bitset.count(words) == 5

    def test_union_of_no_rows_is_empty(self):
        rows = np.zeros((0, 2), dtype=bitset.WORD_DTYPE)
        assert bitset.is_empty(bitset.union_rows(rows))

    def test_intersects(self):
        left = bitset.from_states([1, 70], 2)
        assert bitset.intersects(left, bitset.from_states([70], 2))
        assert not bitset.intersects(left, bitset.from_states([2], 2))


class TestAutomaton:
    def test_single_literal_table(self):
        automaton, _ = compile_pattern("a")
        assert automaton.state_count == 2
        assert automaton.start_state == 0
        assert automaton.accepting_states() == [1]
        assert automaton.destinations(0, "a") == [1]
        assert automaton.destinations(1, "a") == []
        assert automaton.destinations(0, "b") == []

    def test_epsilon_closures_include_self(self):
        automaton, _ = compile_pattern("ab")
        for state in range(automaton.state_count):
            assert state in automaton.epsilon_closure(state)
        assert automaton.epsilon_closure(1) == [1, 2]

    def test_star_closure(self):
        automaton, _ = compile_pattern("a*")
        # start 2 reaches a.start 0 and end 3; a.end 1 loops back to 0 and exits to 3
        assert automaton.epsilon_closure(2) == [0, 2, 3]
        assert automaton.epsilon_closure(1) == [0, 1, 3]

    def test_closure_terminates_on_cycles(self):
        automaton, _ = compile_pattern("(a*)*")
        assert automaton.start_state in automaton.epsilon_closure(automaton.start_state)

    def test_arrays_are_read_only(self):
        automaton, _ = compile_pattern("a|b")
        with pytest.raises(ValueError):
            automaton.transitions[0, 0, 0] = 1
        with pytest.raises(ValueError):
            automaton.epsilon_closures[0, 0] = 1
        with pytest.raises(ValueError):
            automaton.accept_states[0] = 0
        assert automaton.alphabet.frozen

    def test_manager_is_sealed_after_compilation(self):
        automaton, manager = compile_pattern("a")
        assert manager.sealed
        with pytest.raises(RuntimeError):
            manager.new_state()

    def test_manager_cannot_be_compiled_twice(self):
        manager = StatesManager()
        fragment = ThompsonBuilder(manager).build(shunting_yard(tokenize("a")))
        Automaton.from_builder(fragment, manager)
        with pytest.raises(RuntimeError):
            Automaton.from_builder(fragment, manager)

    def test_large_automaton_uses_several_words(self):
        pattern = "a" * 40
        automaton, _ = compile_pattern(pattern, max_states=100)
        assert automaton.state_count == 80
        assert automaton.word_count == 2
        assert automaton.accepting_states() == [79]

    def test_table_shape(self):
        automaton, _ = compile_pattern("a(b|c)*")
        assert automaton.transitions.shape == (10, 4, 1)
        assert automaton.epsilon_closures.shape == (10, 1)

    def test_to_frame(self):
        automaton, _ = compile_pattern("ab")
        frame = automaton.to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["ε", "a", "b"]
        assert frame.index.name == "state"
        assert frame.loc[0, "a"] == [1]
        assert frame.loc[1, "ε"] == [2]
        assert frame.loc[3, "b"] == []

    def test_debug_info(self):
        automaton, _ = compile_pattern("a|b")
        info = automaton.get_debug_info()
        assert info["state_count"] == 6
        assert info["start_state"] == 4
        assert info["accept_states"] == [5]
        assert info["alphabet"] == ["ε", "a", "b"]
        assert info["transition_count"] == 6
        assert info["epsilon_transition_count"] == 4

    def test_rejects_inconsistent_tables(self):
        alphabet = Alphabet()
        transitions = np.zeros((2, 2, 1), dtype=bitset.WORD_DTYPE)
        closures = np.zeros((2, 1), dtype=bitset.WORD_DTYPE)
        accept = np.zeros(1, dtype=bitset.WORD_DTYPE)
        with pytest.raises(ValueError):
            Automaton(0, accept, transitions, closures, alphabet, 64)
