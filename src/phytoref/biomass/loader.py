"""Read a canonical delimited record table into a pandas DataFrame.

The table is expected to already use the Sample Record column names
(``year, station, date, phylum, ..., value, unit``). Converting vendor
exports into this layout is the ingestion collaborator's job; this loader
only types the columns and derives ``month`` (and ``year`` when absent).
"""

from pathlib import Path
from typing import TYPE_CHECKING, Union
import logging

import pandas as pd

from phytoref.biomass.records import RANK_COLUMNS, RECORD_COLUMNS

if TYPE_CHECKING:
    from phytoref.schemas import InternalConfig

__all__ = ['RecordLoader']

logger = logging.getLogger(__name__)

_TEXT_COLUMNS = ["station", *RANK_COLUMNS, "scientific_name", "trophic_type", "parameter", "unit"]


class RecordLoader:
    """Load sample records from delimited text.

    Parameters
    ----------
    config : InternalConfig
        Uses ``reader.delimiter`` and ``reader.encoding``.

    Examples
    --------
    >>> loader = RecordLoader(config)
    >>> records = loader.load("phytoplankton_2000_2020.txt")
    >>> records[["station", "date", "month", "value"]].head()
    """

    def __init__(self, config: "InternalConfig"):
        self.delimiter = config.reader.delimiter
        self.encoding = config.reader.encoding

    def load(self, path: Union[str, Path]) -> pd.DataFrame:
        """Read ``path`` and return a typed record table.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Record table not found: {path}")

        raw = pd.read_csv(
            path,
            sep=self.delimiter,
            encoding=self.encoding,
            dtype=str,
            keep_default_na=False,
            na_values=[""],
        )
        logger.info("Read %d rows from %s", len(raw), path.name)
        return self.prepare(raw)

    @staticmethod
    def prepare(raw: pd.DataFrame) -> pd.DataFrame:
        """Type the columns of an untyped record table.

        Rows whose date, year, month or value cannot be parsed are dropped
        with a warning.
        Columns outside the Sample Record layout are kept as they are.
        """
        df = raw.copy()
        df.columns = [str(c).strip() for c in df.columns]

        if "date" in df.columns:
            df["date"] = pd.to_datetime(df["date"], errors="coerce")
            if "month" not in df.columns:
                df["month"] = df["date"].dt.month
            if "year" not in df.columns:
                df["year"] = df["date"].dt.year

        for col in ("value", "depth_min", "year", "month"):
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")

        for col in _TEXT_COLUMNS:
            if col in df.columns:
                df[col] = df[col].map(lambda v: v.strip() if isinstance(v, str) else v)

        parsed = [c for c in ("date", "value", "year", "month") if c in df.columns]
        invalid = df[parsed].isna().any(axis=1)
        if invalid.any():
            logger.warning("Dropping %d row(s) with unparseable date, year, month or value",
                           int(invalid.sum()))
            df = df.loc[~invalid].copy()

        for col in ("year", "month"):
            if col in df.columns:
                df[col] = df[col].astype(int)

        ordered = [c for c in RECORD_COLUMNS if c in df.columns]
        extra = [c for c in df.columns if c not in RECORD_COLUMNS]
        return df[ordered + extra].reset_index(drop=True)
