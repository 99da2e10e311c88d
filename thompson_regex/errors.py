# thompson_regex/errors.py
"""
Error taxonomy for regex compilation.

Syntax errors carry the offending position and render a caret pointer into
the pattern, so callers can show the user where compilation stopped.
"""

from typing import Optional


class RegexError(Exception):
    """Base class for every error raised by the regex engine."""
    pass


class MalformedPatternError(RegexError, TypeError):
    """Raised when the pattern itself is absent or not a string."""

    def __init__(self, pattern):
        self.pattern = pattern
        super().__init__(
            f"Pattern must be a string, got {type(pattern).__name__}"
        )


class PatternSyntaxError(RegexError):
    """Base class for pattern syntax errors with context visualization."""

    def __init__(self, message: str, position: Optional[int] = None, pattern: Optional[str] = None):
        self.message = message
        self.position = position
        self.pattern = pattern
        self.context = self._get_error_context()
        if self.context:
            super().__init__(f"{message}\nAt position {position}:\n{self.context}")
        else:
            super().__init__(message)

    def _get_error_context(self) -> str:
        """Get error context with pointer to error position."""
        if self.pattern is None or self.position is None:
            return ""
        start = max(0, self.position - 20)
        end = min(len(self.pattern), self.position + 20)
        context = self.pattern[start:end]
        pointer = " " * (self.position - start) + "^"
        return f"{context}\n{pointer}"


class UnbalancedPatternError(PatternSyntaxError):
    """Error for unbalanced parentheses."""
    pass


class EmptyPatternError(PatternSyntaxError):
    """Error for patterns that describe no expression at all."""
    pass


class MissingOperandError(PatternSyntaxError):
    """Error for operators that lack one or both of their operands."""
    pass


class CapacityExceededError(RegexError):
    """
    Raised when a pattern needs more NFA states than the declared maximum.

    Attributes:
        limit: The configured maximum number of states
        pattern: The pattern being compiled, when known
    """

    def __init__(self, limit: int, pattern: Optional[str] = None):
        self.limit = limit
        self.pattern = pattern
        message = f"Automaton exceeds the maximum of {limit} states"
        if pattern is not None:
            message += f" for pattern {pattern!r}"
        super().__init__(message)
