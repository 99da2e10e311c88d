from typing import Dict, Iterator, Optional, Tuple

# Label of silent transitions. No input character can equal the empty string.
EPSILON = ""
EPSILON_COLUMN = 0


class Alphabet:
    """
    Dense numbering of the symbols used by an automaton's transitions.

    Epsilon always owns column 0; every other symbol gets the next free
    column the first time it is registered.
    """

    def __init__(self):
        self._columns: Dict[str, int] = {EPSILON: EPSILON_COLUMN}
        self._symbols = [EPSILON]
        self._frozen = False

    def add_symbol(self, symbol: str) -> int:
        """
        Register a symbol and return its column.

        Registering a symbol twice, or registering epsilon, returns the
        existing column.

        Raises:
            RuntimeError: If the alphabet has been frozen
        """
        column = self._columns.get(symbol)
        if column is not None:
            return column
        if self._frozen:
            raise RuntimeError(f"Cannot add symbol {symbol!r} to a frozen alphabet")
        column = len(self._symbols)
        self._columns[symbol] = column
        self._symbols.append(symbol)
        return column

    def column(self, symbol: str) -> Optional[int]:
        """Return the column of a symbol, or None if it was never registered."""
        return self._columns.get(symbol)

    def freeze(self) -> "Alphabet":
        """Return a read-only copy of this alphabet."""
        frozen = Alphabet()
        frozen._columns = dict(self._columns)
        frozen._symbols = list(self._symbols)
        frozen._frozen = True
        return frozen

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def symbols(self) -> Tuple[str, ...]:
        """All symbols in column order, epsilon first."""
        return tuple(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __repr__(self) -> str:
        shown = ["ε" if s == EPSILON else s for s in self._symbols]
        return f"Alphabet({shown!r})"
