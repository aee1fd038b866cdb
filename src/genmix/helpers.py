"""General utility functions for picking values out of EIA API time series."""

from collections.abc import Sequence
from typing import Any

import pandas as pd

import genmix.logging_helpers

logger = genmix.logging_helpers.get_logger(__name__)


def year_window(year: int) -> tuple[int, int]:
    """Return the padded range of years to request around ``year``.

    The EIA API does not always line up annual periods with the ``start``/``end``
    parameters, so we ask for the surrounding years and pick out the one we want
    ourselves.
    """
    return year - 1, year + 1


def _series_to_dataframe(rows: Sequence[dict[str, Any] | None]) -> pd.DataFrame:
    """Convert an API ``response.data`` array to a dataframe, dropping null entries."""
    return pd.DataFrame.from_records([row for row in rows if row is not None])


def select_period_value(
    rows: Sequence[dict[str, Any] | None], year: int, field: str
) -> float | None:
    """Pick the value of ``field`` reported for ``year`` out of an annual series.

    Args:
        rows: The ``response.data`` array of an EIA API response. Each entry has a
            ``period`` and, if anything was reported, the requested data field.
        year: The year to select.
        field: Name of the data column, e.g. ``generation`` or ``value``.

    Returns:
        The value for the first row whose period is ``year``, or None if there is no
        such row or the row doesn't carry a numeric ``field``. What None means is up
        to the caller.
    """
    df = _series_to_dataframe(rows)
    if df.empty or "period" not in df.columns:
        return None
    matches = df.loc[df["period"].astype(str).str.strip() == str(year)]
    if matches.empty or field not in matches.columns:
        return None
    value = matches[field].iloc[0]
    if pd.isna(value):
        return None
    value = pd.to_numeric(value, errors="coerce")
    if pd.isna(value):
        return None
    return float(value)


def isolate_years(rows: Sequence[dict[str, Any] | None]) -> list[int]:
    """List the distinct years in an annual series, most recent first."""
    df = _series_to_dataframe(rows)
    if df.empty or "period" not in df.columns:
        return []
    years = pd.to_numeric(df["period"], errors="coerce").dropna().astype(int)
    if len(years) != years.nunique():
        logger.warning("Annual series contains duplicate periods; dropping them.")
    return sorted(years.unique().tolist(), reverse=True)
