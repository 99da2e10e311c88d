"""
Property tests: compiled automata accept exactly the language of the pattern.

Python's ``re`` module shares the syntax subset used here (literals,
grouping, ``|``, ``*``, ``+``, ``?``), so ``re.fullmatch`` serves as the
reference. Generated patterns parenthesize every composite so that both
engines parse them identically.
"""

import re

from hypothesis import given, settings, strategies as st

from thompson_regex import compile, matches, to_postfix, format_postfix

LETTERS = "abc"


def _unary(operator):
    def render(operand):
        if len(operand) > 1:
            return f"({operand}){operator}"
        return f"{operand}{operator}"
    return render


patterns = st.recursive(
    st.sampled_from(list(LETTERS)),
    lambda children: st.one_of(
        st.tuples(children, children).map(lambda pair: f"({pair[0]}{pair[1]})"),
        st.tuples(children, children).map(lambda pair: f"({pair[0]}|{pair[1]})"),
        children.map(_unary("*")),
        children.map(_unary("+")),
        children.map(_unary("?")),
    ),
    max_leaves=6,
)

inputs = st.text(alphabet=LETTERS, max_size=8)


@settings(max_examples=300, deadline=None)
@given(pattern=patterns, text=inputs)
def test_agrees_with_re_fullmatch(pattern, text):
    automaton = compile(pattern, max_states=4096)
    expected = re.fullmatch(pattern, text) is not None
    assert matches(automaton, text) == expected


@settings(max_examples=100, deadline=None)
@given(pattern=patterns, texts=st.lists(inputs, max_size=5))
def test_compilation_is_idempotent(pattern, texts):
    first = compile(pattern, max_states=4096, use_cache=False)
    second = compile(pattern, max_states=4096, use_cache=False)
    for text in texts:
        assert matches(first, text) == matches(second, text)


@settings(max_examples=100, deadline=None)
@given(pattern=patterns)
def test_postfix_has_no_parentheses(pattern):
    rendered = format_postfix(to_postfix(pattern))
    assert "(" not in rendered and ")" not in rendered


@settings(max_examples=100, deadline=None)
@given(literal=st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), min_size=1, max_size=10))
def test_escaped_text_matches_itself(literal):
    automaton = compile("".join("\\" + char for char in literal))
    assert matches(automaton, literal)
    assert not matches(automaton, literal + literal[-1])
