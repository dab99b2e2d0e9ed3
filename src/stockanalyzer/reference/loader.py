"""
Reference data loader.

Reads the JSON file that maps symbols (e.g. ``"AAPL"``, ``"600519"``) to
static fundamentals, plus the quarterly financials table, and caches both
in memory.  The file is loaded eagerly at construction time so that
configuration errors surface immediately rather than on the first symbol
switch.

Expected JSON structure::

    {
      "profiles":  {"AAPL": {"name": "...", "price": 189.5, ...}, ...},
      "quarterly": [{"quarter": "Q1 2023", "revenue": 1174, ...}, ...]
    }
"""
import json
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from src.stockanalyzer.data.schemas import QuarterlyReport, TickerProfile
from src.stockanalyzer.exceptions import UnknownSymbolError

DEFAULT_REFERENCE_FILE = Path(__file__).resolve().parent / "data" / "tickers.json"


class ReferenceLoader:
    """Loads and caches symbol -> profile mappings from a JSON file."""

    def __init__(self, reference_file: Optional[str] = None):
        """
        Args:
            reference_file: Path to the reference file.  Defaults to the
                            table shipped with the package.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or a record fails
                        schema validation.
        """
        self.file_path = Path(reference_file) if reference_file else DEFAULT_REFERENCE_FILE
        self._profiles: Dict[str, TickerProfile] = {}
        self._quarterly: List[QuarterlyReport] = []
        self._load_reference()

    def _load_reference(self) -> None:
        if not self.file_path.exists():
            logger.critical(f"Reference file not found at: {self.file_path}")
            raise FileNotFoundError(
                f"Missing reference data file: {self.file_path}"
            )

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            logger.critical(f"Invalid JSON in reference file: {e}")
            raise ValueError("Corrupted reference data file") from e

        try:
            self._profiles = {
                symbol: TickerProfile(symbol=symbol, **fields)
                for symbol, fields in raw.get("profiles", {}).items()
            }
            self._quarterly = [
                QuarterlyReport(**row) for row in raw.get("quarterly", [])
            ]
        except (ValidationError, TypeError, AttributeError) as e:
            logger.critical(f"Reference record failed validation: {e}")
            raise ValueError("Reference data violates the profile schema") from e

        logger.info(
            f"Loaded {len(self._profiles)} ticker profiles from {self.file_path.name}"
        )

    def symbols(self) -> List[str]:
        """Return the supported symbols in file order."""
        return list(self._profiles.keys())

    def resolve_symbol(self, raw: str) -> str:
        """Normalise user input to a key of the reference table.

        Tickers are matched case-insensitively via their upper-cased form;
        anything else (e.g. numeric exchange codes) is matched as typed,
        minus surrounding whitespace.

        Raises:
            UnknownSymbolError: If neither form is a known symbol.
        """
        trimmed = (raw or "").strip()
        for candidate in (trimmed.upper(), trimmed):
            if candidate in self._profiles:
                return candidate

        logger.error(
            f"Symbol '{trimmed}' not found. Available: {self.symbols()}"
        )
        raise UnknownSymbolError(trimmed, self.symbols())

    def get_profile(self, symbol: str) -> TickerProfile:
        """Return the fundamentals for an exact symbol key.

        Raises:
            UnknownSymbolError: If *symbol* is not present in the table.
        """
        if symbol not in self._profiles:
            logger.error(
                f"Symbol '{symbol}' not found. Available: {self.symbols()}"
            )
            raise UnknownSymbolError(symbol, self.symbols())

        return self._profiles[symbol]

    def get_quarterly(self) -> List[QuarterlyReport]:
        return list(self._quarterly)
