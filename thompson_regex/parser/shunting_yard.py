"""
Infix to postfix conversion of regex tokens.

Implements Dijkstra's Shunting Yard algorithm over the token stream produced
by the tokenizer and the concatenation expander. Precedence, highest first:
unary postfix operators, concatenation, alternation. Equal precedence pops
before pushing, so binary operators associate to the left.
"""

from typing import Dict, Iterable, List, Optional

from thompson_regex.errors import UnbalancedPatternError
from thompson_regex.parser.tokenizer import Token, TokenType, UNARY_OPERATORS, BINARY_OPERATORS
from thompson_regex.utils.logging_config import get_logger

logger = get_logger(__name__)

PRECEDENCE: Dict[TokenType, int] = {
    TokenType.KLEENE_STAR: 3,
    TokenType.POSITIVE_CLOSURE: 3,
    TokenType.OPTIONAL: 3,
    TokenType.CONCATENATION: 2,
    TokenType.ALTERNATION: 1,
}


def precedence(token_type: TokenType) -> int:
    """Return the binding strength of an operator, 0 for non-operators."""
    return PRECEDENCE.get(token_type, 0)


def shunting_yard(tokens: List[Token], pattern: Optional[str] = None) -> List[Token]:
    """
    Convert an infix token list with explicit concatenation to postfix order.

    Args:
        tokens: Infix tokens, concatenation already made explicit
        pattern: The raw pattern, used only to annotate errors

    Returns:
        The tokens in postfix order, parentheses removed

    Raises:
        UnbalancedPatternError: If parentheses do not pair up
    """
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if token.type == TokenType.LITERAL:
            output.append(token)

        elif token.type in UNARY_OPERATORS or token.type in BINARY_OPERATORS:
            current = precedence(token.type)
            while (stack and stack[-1].type != TokenType.LEFT_PAREN
                   and precedence(stack[-1].type) >= current):
                output.append(stack.pop())
            stack.append(token)

        elif token.type == TokenType.LEFT_PAREN:
            stack.append(token)

        elif token.type == TokenType.RIGHT_PAREN:
            while stack and stack[-1].type != TokenType.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                logger.debug(f"Unmatched ')' at position {token.position} in {pattern!r}")
                raise UnbalancedPatternError(
                    "Unmatched closing parenthesis", token.position, pattern
                )
            stack.pop()

    while stack:
        token = stack.pop()
        if token.type == TokenType.LEFT_PAREN:
            logger.debug(f"Unmatched '(' at position {token.position} in {pattern!r}")
            raise UnbalancedPatternError(
                "Unmatched opening parenthesis", token.position, pattern
            )
        output.append(token)

    return output


def format_postfix(tokens: Iterable[Token]) -> str:
    """
    Render a postfix token sequence the way it would be printed for debugging.

    Tokens are shown by value only, so an escaped operator looks the same as
    the real one: ``a\\*`` renders as ``a*.``. Inspect ``Token.type`` when the
    distinction matters.
    """
    return "".join(str(token) for token in tokens)
