"""Fixtures shared by the genmix unit tests.

None of the unit tests touch the network. The reconciliation core is exercised against
:class:`FakeEiaApi`, an in-memory stand-in for both fetcher protocols that records
every request it receives.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

import pandas as pd
import pytest

from genmix.capacity import load_capacity_tables
from genmix.eiaapi import EiaApiError
from genmix.models import CapacityModel, Scenario, Technology


def annual_rows(values: Mapping[int, Any], field: str) -> list[dict[str, Any]]:
    """Build an EIA style ``response.data`` array from {year: value}."""
    return [{"period": str(year), field: value} for year, value in values.items()]


class FakeEiaApi:
    """In-memory EIA API implementing the generation and import/export fetchers.

    Attributes:
        generation: {(fuel code, region): {year: GWh}}
        cross_border: {region: {year: GWh}}
        cross_region: {region: {year: GWh}}
        history: Years reported by the national all-fuels series.
        raw: {(fuel code, region): rows} overriding ``generation`` verbatim.
        gates: {region: asyncio.Event} requests for a region block until it is set.
        failing: Regions for which every request raises :class:`EiaApiError`.
    """

    def __init__(self):
        self.generation: dict[tuple[str, str], dict[int, Any]] = {}
        self.cross_border: dict[str, dict[int, Any]] = {}
        self.cross_region: dict[str, dict[int, Any]] = {}
        self.history: list[int] = []
        self.raw: dict[tuple[str, str], list[dict[str, Any] | None]] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple] = []

    async def _respond(self, region: str) -> None:
        if region in self.failing:
            raise EiaApiError(f"Simulated failure for {region}")
        if (gate := self.gates.get(region)) is not None:
            await gate.wait()

    async def fetch_generation(self, fuel_code, region, year_low, year_high):
        self.calls.append(("generation", fuel_code, region, year_low, year_high))
        await self._respond(region)
        if (fuel_code, region) in self.raw:
            return list(self.raw[(fuel_code, region)])
        values = self.generation.get((fuel_code, region), {})
        return annual_rows(
            {y: v for y, v in values.items() if year_low <= y <= year_high},
            "generation",
        )

    async def fetch_generation_history(self, region="US", fuel_code="ALL"):
        self.calls.append(("history", fuel_code, region))
        await self._respond(region)
        return annual_rows(dict.fromkeys(self.history, 1.0), "generation")

    async def fetch_cross_border(self, region, year_low, year_high):
        self.calls.append(("cross_border", region, year_low, year_high))
        await self._respond(region)
        values = self.cross_border.get(region, {})
        return annual_rows(
            {y: v for y, v in values.items() if year_low <= y <= year_high}, "value"
        )

    async def fetch_cross_region(self, region, year_low, year_high):
        self.calls.append(("cross_region", region, year_low, year_high))
        await self._respond(region)
        values = self.cross_region.get(region, {})
        return annual_rows(
            {y: v for y, v in values.items() if year_low <= y <= year_high}, "value"
        )


@pytest.fixture()
def fake_api() -> FakeEiaApi:
    """An empty fake EIA API. Every series reports nothing until populated."""
    return FakeEiaApi()


def capacity_frame(rows: list[tuple[str, Any]]) -> pd.DataFrame:
    """A condensed capacity table as it comes out of ``pd.read_csv``."""
    return pd.DataFrame(
        [(str(i), label, value) for i, (label, value) in enumerate(rows)],
        columns=["", "state", "capacity_gwh"],
    )


@pytest.fixture()
def make_capacity_table():
    """Build condensed capacity tables from (label, value) rows."""
    return capacity_frame


@pytest.fixture()
def capacity_tables() -> dict[tuple[Scenario, Technology], pd.DataFrame]:
    """Six small regional capacity tables covering Colorado, Texas and Vermont."""
    tables = {}
    for scale, scenario in enumerate(Scenario, start=1):
        tables[(scenario, Technology.SOLAR)] = capacity_frame(
            [("Colorado", 100.0 / scale), ("Texas", 400.0 / scale)]
        )
        tables[(scenario, Technology.WIND)] = capacity_frame(
            [
                ("Colorado", 50.0 / scale),
                ("Texas", 300.0 / scale),
                ("Vermont", 10.0 / scale),
            ]
        )
    return tables


@pytest.fixture()
def offshore_table() -> pd.DataFrame:
    """National offshore wind capacity by scenario."""
    return capacity_frame([("open", 900.0), ("reference", 600.0), ("limited", 300.0)])


@pytest.fixture()
def capacity_model(capacity_tables, offshore_table) -> CapacityModel:
    """Capacity entries built from the small fixture tables."""
    return load_capacity_tables(capacity_tables, offshore_table)
