"""
Thompson construction of an NFA from a postfix token sequence.

The builder works on an ephemeral graph owned by a StatesManager: states are
plain integer ids and transitions are recorded as (from, symbol, to) triples.
The graph is frozen into a dense Automaton by
:meth:`thompson_regex.matcher.automata.Automaton.from_builder`, which seals
the manager so build-time and match-time state never alias.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional

from thompson_regex.config import DEFAULT_MAX_STATES
from thompson_regex.errors import CapacityExceededError, EmptyPatternError, MissingOperandError
from thompson_regex.matcher.alphabet import EPSILON, Alphabet
from thompson_regex.parser.tokenizer import Token, TokenType
from thompson_regex.utils.logging_config import get_logger

logger = get_logger(__name__)


class Transition(NamedTuple):
    """A labeled edge of the build-time graph; the empty symbol is epsilon."""
    from_state: int
    symbol: str
    to_state: int


@dataclass(frozen=True)
class Fragment:
    """A sub-automaton under construction, identified by its entry and exit states."""
    start: int
    end: int


class StatesManager:
    """
    Build-time bookkeeping for a single compilation.

    Hands out state ids, records transitions and registers every transition
    symbol in the alphabet. Refuses to allocate more than ``max_states``
    states, and refuses any change once it has been sealed.
    """

    def __init__(self, max_states: int = DEFAULT_MAX_STATES, pattern: Optional[str] = None):
        if max_states < 1:
            raise ValueError(f"max_states must be at least 1, got {max_states}")
        self.max_states = max_states
        self.pattern = pattern
        self.next_id = 0
        self.states: List[int] = []
        self.transitions: List[Transition] = []
        self.alphabet = Alphabet()
        self._sealed = False

    @property
    def state_count(self) -> int:
        return len(self.states)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("StatesManager has already been compiled into an automaton")

    def new_state(self) -> int:
        """Create a new state and return its id."""
        self._check_open()
        if self.next_id >= self.max_states:
            logger.warning(
                f"State limit of {self.max_states} reached while compiling {self.pattern!r}"
            )
            raise CapacityExceededError(self.max_states, self.pattern)
        state_id = self.next_id
        self.next_id += 1
        self.states.append(state_id)
        return state_id

    def add_transition(self, from_state: int, symbol: str, to_state: int) -> None:
        """Record a transition and register its symbol in the alphabet."""
        self._check_open()
        self.transitions.append(Transition(from_state, symbol, to_state))
        self.alphabet.add_symbol(symbol)

    def add_epsilon(self, from_state: int, to_state: int) -> None:
        """Record a silent transition."""
        self.add_transition(from_state, EPSILON, to_state)


class ThompsonBuilder:
    """
    Builds a single Fragment for a whole postfix expression.

    Each operator pops its operands off a fragment stack and pushes the
    combined fragment back:

    - literal ``x``:  ``s --x--> e``
    - concatenation:  ``a.end --ε--> b.start``
    - alternation:    ``s --ε--> a.start, b.start``; ``a.end, b.end --ε--> e``
    - ``+``:          ``s --ε--> a.start``; ``a.end --ε--> a.start, e``
    - ``*``:          as ``+`` plus ``s --ε--> e``
    - ``?``:          ``s --ε--> a.start, e``; ``a.end --ε--> e``
    """

    def __init__(self, manager: StatesManager):
        self.manager = manager
        self._handlers: Dict[TokenType, Callable[[List[Fragment], Token], Fragment]] = {
            TokenType.LITERAL: self._literal,
            TokenType.CONCATENATION: self._concatenation,
            TokenType.ALTERNATION: self._alternation,
            TokenType.POSITIVE_CLOSURE: self._positive_closure,
            TokenType.KLEENE_STAR: self._kleene_star,
            TokenType.OPTIONAL: self._optional,
        }

    def build(self, postfix: List[Token]) -> Fragment:
        """
        Run Thompson's construction over a postfix token list.

        Args:
            postfix: Tokens in postfix order, as produced by the parser

        Returns:
            The fragment spanning the whole expression

        Raises:
            EmptyPatternError: If there are no tokens to build from
            MissingOperandError: If an operator lacks operands or operands
                                 are left without an operator joining them
            CapacityExceededError: If the state limit is exceeded
        """
        pattern = self.manager.pattern
        if not postfix:
            raise EmptyPatternError("Pattern contains no expression", None, pattern)

        stack: List[Fragment] = []
        for token in postfix:
            handler = self._handlers.get(token.type)
            if handler is None:
                raise MissingOperandError(
                    f"Unexpected token {token.value!r} in postfix sequence", token.position, pattern
                )
            stack.append(handler(stack, token))

        if len(stack) != 1:
            raise MissingOperandError(
                f"Expression left {len(stack)} unconnected fragments", None, pattern
            )

        fragment = stack[0]
        logger.debug(
            f"Built fragment {fragment} with {self.manager.state_count} states "
            f"and {len(self.manager.transitions)} transitions"
        )
        return fragment

    def _pop(self, stack: List[Fragment], token: Token) -> Fragment:
        if not stack:
            raise MissingOperandError(
                f"Operator {token.value!r} is missing an operand", token.position, self.manager.pattern
            )
        return stack.pop()

    def _literal(self, stack: List[Fragment], token: Token) -> Fragment:
        start = self.manager.new_state()
        end = self.manager.new_state()
        self.manager.add_transition(start, token.value, end)
        return Fragment(start, end)

    def _concatenation(self, stack: List[Fragment], token: Token) -> Fragment:
        b = self._pop(stack, token)
        a = self._pop(stack, token)
        self.manager.add_epsilon(a.end, b.start)
        return Fragment(a.start, b.end)

    def _alternation(self, stack: List[Fragment], token: Token) -> Fragment:
        b = self._pop(stack, token)
        a = self._pop(stack, token)
        start = self.manager.new_state()
        end = self.manager.new_state()
        self.manager.add_epsilon(start, a.start)
        self.manager.add_epsilon(start, b.start)
        self.manager.add_epsilon(a.end, end)
        self.manager.add_epsilon(b.end, end)
        return Fragment(start, end)

    def _positive_closure(self, stack: List[Fragment], token: Token) -> Fragment:
        a = self._pop(stack, token)
        start = self.manager.new_state()
        end = self.manager.new_state()
        self.manager.add_epsilon(start, a.start)
        self.manager.add_epsilon(a.end, a.start)
        self.manager.add_epsilon(a.end, end)
        return Fragment(start, end)

    def _kleene_star(self, stack: List[Fragment], token: Token) -> Fragment:
        fragment = self._positive_closure(stack, token)
        self.manager.add_epsilon(fragment.start, fragment.end)
        return fragment

    def _optional(self, stack: List[Fragment], token: Token) -> Fragment:
        a = self._pop(stack, token)
        start = self.manager.new_state()
        end = self.manager.new_state()
        self.manager.add_epsilon(start, a.start)
        self.manager.add_epsilon(start, end)
        self.manager.add_epsilon(a.end, end)
        return Fragment(start, end)
