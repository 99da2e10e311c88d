from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from thompson_regex.utils.logging_config import get_logger

logger = get_logger(__name__)

ESCAPE_SYMBOL = "\\"
CONCAT_SYMBOL = "."


class TokenType(Enum):
    """Enum representing the different types of regex tokens."""
    LITERAL = "LITERAL"
    KLEENE_STAR = "KLEENE_STAR"
    POSITIVE_CLOSURE = "POSITIVE_CLOSURE"
    OPTIONAL = "OPTIONAL"
    CONCATENATION = "CONCATENATION"
    ALTERNATION = "ALTERNATION"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"


# Reserved characters; anything else is a literal.
RESERVED_CHARACTERS: Dict[str, TokenType] = {
    "*": TokenType.KLEENE_STAR,
    "+": TokenType.POSITIVE_CLOSURE,
    "?": TokenType.OPTIONAL,
    CONCAT_SYMBOL: TokenType.CONCATENATION,
    "|": TokenType.ALTERNATION,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

UNARY_OPERATORS: FrozenSet[TokenType] = frozenset({
    TokenType.KLEENE_STAR,
    TokenType.POSITIVE_CLOSURE,
    TokenType.OPTIONAL,
})

BINARY_OPERATORS: FrozenSet[TokenType] = frozenset({
    TokenType.CONCATENATION,
    TokenType.ALTERNATION,
})

# Token types that can end a sub-expression / begin one.
_ENDS_EXPRESSION: FrozenSet[TokenType] = UNARY_OPERATORS | {
    TokenType.LITERAL,
    TokenType.RIGHT_PAREN,
}
_BEGINS_EXPRESSION: FrozenSet[TokenType] = frozenset({
    TokenType.LITERAL,
    TokenType.LEFT_PAREN,
})


@dataclass(frozen=True)
class Token:
    """
    A single token of a regular expression.

    Attributes:
        value: The character the token was read from (for escaped literals,
               the escaped character itself)
        type: The token type
        position: Index of the token in the raw pattern, None for tokens
                  synthesized by the concatenation expander
    """
    value: str
    type: TokenType
    position: Optional[int] = field(default=None, compare=False)

    @property
    def is_operator(self) -> bool:
        return self.type in UNARY_OPERATORS or self.type in BINARY_OPERATORS

    def __str__(self) -> str:
        return self.value


def classify(character: str) -> TokenType:
    """Return the token type of a single, unescaped character."""
    return RESERVED_CHARACTERS.get(character, TokenType.LITERAL)


def tokenize(pattern: Optional[str]) -> List[Token]:
    """
    Split a raw pattern into tokens.

    An escape symbol followed by any character yields one literal token for
    that character. A trailing escape symbol with nothing after it is kept
    as a literal backslash.

    Args:
        pattern: The raw pattern, or None

    Returns:
        List of tokens in pattern order; empty for a None pattern
    """
    if pattern is None:
        return []

    tokens: List[Token] = []
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == ESCAPE_SYMBOL and i + 1 < length:
            tokens.append(Token(pattern[i + 1], TokenType.LITERAL, i))
            i += 2
            continue
        tokens.append(Token(char, classify(char), i))
        i += 1

    logger.debug(f"Tokenized {pattern!r} into {len(tokens)} tokens")
    return tokens


def needs_concatenation(left: Token, right: Token) -> bool:
    """Check whether two adjacent tokens concatenate implicitly."""
    return left.type in _ENDS_EXPRESSION and right.type in _BEGINS_EXPRESSION


def insert_concatenation(tokens: List[Token]) -> List[Token]:
    """
    Make implicit concatenation explicit.

    For example ``ab`` becomes ``a.b`` and ``a(b)`` becomes ``a.(b)``.

    Args:
        tokens: Tokens as produced by :func:`tokenize`

    Returns:
        A new token list with concatenation tokens inserted
    """
    result: List[Token] = []
    for i, token in enumerate(tokens):
        result.append(token)
        if i + 1 < len(tokens) and needs_concatenation(token, tokens[i + 1]):
            result.append(Token(CONCAT_SYMBOL, TokenType.CONCATENATION))
    return result
