"""
Symbol-selection session.

The presentation layer owns a single piece of state: which symbol is
selected.  Every change re-runs the whole pipeline.  Results are applied
last-write-wins on the selection: a result computed for a selection that
has since been superseded is discarded, whatever order the computations
finish in.
"""
from typing import NamedTuple, Optional

from loguru import logger

from src.stockanalyzer.core.engine import AnalysisEngine
from src.stockanalyzer.core.types import AnalysisResult

DEFAULT_SYMBOL = "AAPL"


class SelectionTicket(NamedTuple):
    symbol: str
    generation: int


class AnalysisSession:
    """Tracks the selected symbol and the result currently on display."""

    def __init__(self, engine: Optional[AnalysisEngine] = None):
        self.engine = engine or AnalysisEngine()
        self._generation = 0
        self._selected: Optional[str] = None
        self._current: Optional[AnalysisResult] = None

    @property
    def selected(self) -> Optional[str]:
        return self._selected

    @property
    def current(self) -> Optional[AnalysisResult]:
        return self._current

    def begin(self, symbol: str) -> SelectionTicket:
        """Record a new selection and return its ticket.

        The symbol is resolved immediately, so an unknown symbol raises
        here and leaves the previous selection in place.
        """
        key = self.engine.loader.resolve_symbol(symbol)
        self._generation += 1
        self._selected = key
        logger.debug(f"Selection #{self._generation}: {key}")
        return SelectionTicket(key, self._generation)

    def compute(self, ticket: SelectionTicket) -> AnalysisResult:
        return self.engine.run(ticket.symbol, generation=ticket.generation)

    def commit(self, ticket: SelectionTicket, result: AnalysisResult) -> bool:
        """Apply *result* if *ticket* is still the latest selection.

        Returns:
            ``True`` if the result was applied, ``False`` if it was stale.
        """
        if ticket.generation != self._generation:
            logger.debug(
                f"Discarding stale result for {ticket.symbol} "
                f"(#{ticket.generation}, latest #{self._generation})"
            )
            return False

        self._current = result
        return True

    def select(self, symbol: str) -> AnalysisResult:
        """Select *symbol* and synchronously compute and apply its result."""
        ticket = self.begin(symbol)
        result = self.compute(ticket)
        self.commit(ticket, result)
        return result

    def start(self, symbol: str = DEFAULT_SYMBOL) -> AnalysisResult:
        """Initial selection when the view is first shown."""
        return self.select(symbol)
