# thompson_regex/executor/regex_compiler.py

import time
from typing import List, Optional

from thompson_regex.config import LimitsConfig
from thompson_regex.errors import EmptyPatternError, MalformedPatternError
from thompson_regex.matcher.automata import Automaton
from thompson_regex.matcher.matcher import matches
from thompson_regex.matcher.thompson import StatesManager, ThompsonBuilder
from thompson_regex.parser.tokenizer import Token, tokenize, insert_concatenation
from thompson_regex.parser.shunting_yard import shunting_yard, format_postfix
from thompson_regex.utils.logging_config import get_logger, PerformanceTimer
from thompson_regex.utils.pattern_cache import (
    get_cache_key, get_cached_pattern, cache_pattern, get_cache_stats, is_caching_enabled
)

# Module logger
logger = get_logger(__name__)

__all__ = ['compile', 'to_postfix', 'format_postfix', 'matches']


def _require_pattern(pattern) -> str:
    if not isinstance(pattern, str):
        logger.debug(f"Rejected pattern of type {type(pattern).__name__}")
        raise MalformedPatternError(pattern)
    return pattern


def to_postfix(pattern: str) -> List[Token]:
    """
    Parse a pattern into postfix token order.

    Runs tokenization, implicit-concatenation insertion and the Shunting
    Yard conversion. Meant for introspection; render the result with
    :func:`format_postfix`.

    Args:
        pattern: The regular expression

    Returns:
        List of tokens in postfix order; empty for an empty pattern

    Raises:
        MalformedPatternError: If pattern is not a string
        UnbalancedPatternError: If parentheses do not pair up
    """
    pattern = _require_pattern(pattern)
    tokens = insert_concatenation(tokenize(pattern))
    postfix = shunting_yard(tokens, pattern)
    logger.debug(f"Postfix form of {pattern!r}: {format_postfix(postfix)!r}")
    return postfix


def compile(pattern: str, max_states: Optional[int] = None,
            use_cache: Optional[bool] = None) -> Automaton:
    """
    Compile a pattern into an immutable NFA.

    Args:
        pattern: The regular expression
        max_states: Upper bound on the number of NFA states; defaults to the
                    configured limit
        use_cache: Whether to consult the shared pattern cache; defaults to
                   the global caching switch, which an explicit value overrides

    Returns:
        Automaton: The compiled automaton

    Raises:
        MalformedPatternError: If pattern is not a string
        EmptyPatternError: If the pattern contains no expression
        UnbalancedPatternError: If parentheses do not pair up
        MissingOperandError: If an operator lacks an operand
        CapacityExceededError: If the automaton needs more than max_states states
    """
    pattern = _require_pattern(pattern)

    if max_states is None:
        max_states = LimitsConfig.from_env().max_states
    elif max_states < 1:
        raise ValueError(f"max_states must be at least 1, got {max_states}")

    caching_enabled = is_caching_enabled() if use_cache is None else use_cache
    cache_key = get_cache_key(pattern, max_states)

    if caching_enabled:
        cached = get_cached_pattern(cache_key)
        if cached:
            automaton, _ = cached
            logger.debug(f"Pattern compilation cache HIT for pattern: {pattern!r}")
            return automaton
        logger.debug(f"Pattern compilation cache MISS for pattern: {pattern!r}")

    compilation_start = time.perf_counter()
    with PerformanceTimer(f"compile {pattern!r}"):
        postfix = to_postfix(pattern)
        if not postfix:
            raise EmptyPatternError("Pattern contains no expression", None, pattern)

        manager = StatesManager(max_states=max_states, pattern=pattern)
        fragment = ThompsonBuilder(manager).build(postfix)
        automaton = Automaton.from_builder(fragment, manager)
    compilation_time = time.perf_counter() - compilation_start

    if caching_enabled:
        cache_pattern(cache_key, automaton, compilation_time)
        logger.debug(f"Cache size after adding new pattern: {get_cache_stats().get('size', 0)}")

    return automaton
