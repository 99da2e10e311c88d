"""
Pytest fixtures for the regex engine tests.
"""

import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from thompson_regex.utils.pattern_cache import clear_pattern_cache, set_caching_enabled, is_caching_enabled


@pytest.fixture(autouse=True)
def fresh_pattern_cache():
    """Every test starts with an empty cache and caching switched on."""
    previous = is_caching_enabled()
    set_caching_enabled(True)
    clear_pattern_cache()
    yield
    clear_pattern_cache()
    set_caching_enabled(previous)


@pytest.fixture
def word_series():
    """Series of candidate inputs with a non-default index and a missing value."""
    return pd.Series(
        ["ababc", "c", "abab", None, "ababcx", "abc"],
        index=[10, 11, 12, 13, 14, 15],
        name="word"
    )


@pytest.fixture
def language_cases():
    """Pattern -> (accepted inputs, rejected inputs)."""
    return {
        "a": (["a"], ["", "b", "aa"]),
        "a*": (["", "a", "aaaa"], ["b", "ab"]),
        "a+": (["a", "aaa"], ["", "b"]),
        "a?": (["", "a"], ["aa", "b"]),
        "a|b": (["a", "b"], ["", "c", "ab"]),
        "(ab)*c": (["c", "abc", "ababc"], ["ababcx", "ab", "abac", ""]),
        "a(b|c)*d": (["ad", "abd", "acbcd"], ["a", "abc", "bd"]),
        "(a|b)+c?": (["a", "abba", "bc"], ["", "c", "abcc"]),
        "a.b": (["ab"], ["a.b", "a", "b"]),
        "a\\*": (["a*"], ["aa", "a", "*"]),
        "\\(x\\)": (["(x)"], ["x", "()"]),
        "ab|cd": (["ab", "cd"], ["abd", "acd", "bc"]),
    }
