"""
Tabular views of a price series.

The core pipeline works on lists of ``PricePoint``; charting and CSV
export want a DataFrame indexed by date instead.
"""
from typing import List

import pandas as pd

from src.stockanalyzer.data.schemas import PricePoint

FRAME_COLUMNS = list(PricePoint.model_fields.keys())
FLOAT_COLUMNS = [c for c in FRAME_COLUMNS if c not in ("date", "volume")]


def series_to_frame(series: List[PricePoint]) -> pd.DataFrame:
    """Return *series* as a DataFrame with a ``DatetimeIndex`` named ``date``.

    Absent indicator values become ``NaN`` so plotting libraries skip them.
    An empty series yields an empty frame with the full column set.
    """
    if not series:
        return pd.DataFrame(columns=FRAME_COLUMNS).set_index("date")

    df = pd.DataFrame([p.model_dump() for p in series], columns=FRAME_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    dtypes = {c: "float64" for c in FLOAT_COLUMNS}
    dtypes["volume"] = "int64"
    return df.set_index("date").astype(dtypes)
