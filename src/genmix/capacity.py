"""Load the pre-processed NREL renewable capacity tables.

NREL publishes solar and wind supply curves under three siting-restriction scenarios.
Those have been condensed outside of this package into one small CSV per scenario and
technology, with one row per state: ``[index, state name, capacity in GWh/year]``.
Offshore wind is only available for the country as a whole, so its table has one row
per scenario instead: ``[index, scenario, capacity in GWh/year]``.

States that don't appear in a table are *not reported* for that scenario and
technology. The national figure is always derivable, so it starts at zero and sums
whatever states are present.
"""

from collections.abc import Mapping
from pathlib import Path

import pandas as pd

import genmix.logging_helpers
from genmix.models import (
    NOT_REPORTED,
    REGIONAL_TECHNOLOGIES,
    CapacityEntry,
    CapacityModel,
    CapacityValue,
    Present,
    Scenario,
    Technology,
)
from genmix.regions import NATIONAL, STATE_CODES, region_code_for_name
from genmix.settings import CapacitySettings

logger = genmix.logging_helpers.get_logger(__name__)

LABEL_COLUMN = 1
VALUE_COLUMN = 2


def _labelled_values(table: pd.DataFrame) -> list[tuple[str, float | None]]:
    """Pull (label, capacity) pairs out of a condensed capacity table by position."""
    labels = table.iloc[:, LABEL_COLUMN].astype(str).str.strip()
    values = pd.to_numeric(table.iloc[:, VALUE_COLUMN], errors="coerce")
    return [
        (label, None if pd.isna(value) else float(value))
        for label, value in zip(labels, values, strict=True)
    ]


def _empty_capacities(
    technologies: tuple[Technology, ...], default: CapacityValue
) -> dict[Scenario, dict[Technology, CapacityValue]]:
    return {scenario: dict.fromkeys(technologies, default) for scenario in Scenario}


def load_capacity_tables(
    regional: Mapping[tuple[Scenario, Technology], pd.DataFrame],
    offshore: pd.DataFrame,
) -> CapacityModel:
    """Build per-state and national capacity entries from the condensed tables.

    Args:
        regional: The six state-level tables keyed by (scenario, technology). Header
            rows must already have been consumed.
        offshore: The national offshore wind table, one row per scenario.

    Returns:
        Capacity entries for every known state and for the nation.
    """
    regional_capacities = {
        code: _empty_capacities(REGIONAL_TECHNOLOGIES, NOT_REPORTED)
        for code in STATE_CODES
    }
    national_totals = {
        scenario: dict.fromkeys(REGIONAL_TECHNOLOGIES, 0.0) for scenario in Scenario
    }

    for (scenario, technology), table in regional.items():
        if technology not in REGIONAL_TECHNOLOGIES:
            raise ValueError(f"{technology} capacity isn't reported by state.")
        for name, capacity in _labelled_values(table):
            code = region_code_for_name(name)
            if code is None:
                logger.debug(f"Skipping {scenario}/{technology} row for {name!r}.")
                continue
            if capacity is None:
                logger.warning(
                    f"Non-numeric {scenario}/{technology} capacity for {name}; "
                    "treating it as not reported."
                )
                continue
            regional_capacities[code][scenario][technology] = Present(value=capacity)
            national_totals[scenario][technology] += capacity

    national_capacities = {
        scenario: {
            technology: Present(value=total) for technology, total in totals.items()
        }
        | {Technology.OFFSHORE_WIND: NOT_REPORTED}
        for scenario, totals in national_totals.items()
    }
    for label, capacity in _labelled_values(offshore):
        try:
            scenario = Scenario(label)
        except ValueError:
            logger.debug(f"Skipping offshore wind row for {label!r}.")
            continue
        if capacity is None:
            logger.warning(
                f"Non-numeric {scenario}/{Technology.OFFSHORE_WIND} capacity; "
                "treating it as not reported."
            )
            continue
        national_capacities[scenario][Technology.OFFSHORE_WIND] = Present(
            value=capacity
        )

    return CapacityModel(
        per_region={
            code: CapacityEntry(region=code, capacities=capacities)
            for code, capacities in regional_capacities.items()
        },
        national=CapacityEntry(region=NATIONAL, capacities=national_capacities),
    )


def read_capacity_table(path: Path) -> pd.DataFrame:
    """Read one condensed capacity CSV, consuming its header row."""
    logger.debug(f"Reading capacity table {path}")
    return pd.read_csv(path, header=0, dtype=str)


def read_capacity_tables(settings: CapacitySettings) -> CapacityModel:
    """Read all seven capacity tables from disk and load them."""
    regional = {
        key: read_capacity_table(path)
        for key, path in settings.regional_table_paths().items()
    }
    offshore = read_capacity_table(settings.offshore_table_path)
    model = load_capacity_tables(regional, offshore)
    logger.info(
        f"Loaded NREL {settings.report_years} capacities from {settings.directory}."
    )
    return model
