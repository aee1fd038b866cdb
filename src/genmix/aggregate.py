"""Reconcile EIA generation series into one consistent generation mix.

For a region and year we need the generation of every subset in
:data:`genmix.codes.GENERATION_SUBSETS` plus the overall total. Each subset is the sum
of one or more EIA fuel type series, and each series may or may not report the year we
asked for. A subset series that doesn't report the year contributes zero.

The overall total is taken from EIA's own all-fuels series instead of summing the
subsets, since the tracked subsets aren't guaranteed to cover every minor fuel.

Every request for a reconciliation is issued at once and awaited together, and nothing
is returned until all of them have come back. If any request fails the whole
reconciliation fails.
"""

import asyncio
from collections.abc import Iterable

import genmix.logging_helpers
from genmix.codes import (
    ALL_FUELS_CODE,
    DEFAULT_CLEAN_SUBSETS,
    GENERATION_SUBSETS,
    validate_classification,
)
from genmix.eiaapi import GenerationFetcher
from genmix.helpers import isolate_years, select_period_value, year_window
from genmix.models import GenerationSubset, ReconciledGeneration, clean_total
from genmix.regions import NATIONAL, is_known_region

logger = genmix.logging_helpers.get_logger(__name__)


class GenerationAggregator:
    """Fan out generation queries for a region/year and fold the answers together."""

    def __init__(
        self,
        fetcher: GenerationFetcher,
        subsets: tuple[GenerationSubset, ...] = GENERATION_SUBSETS,
    ):
        """Constructs GenerationAggregator.

        Args:
            fetcher: Source of annual generation series.
            subsets: Generation subsets to report, in display order.
        """
        self.fetcher = fetcher
        self.subsets = subsets

    async def available_years(self) -> list[int]:
        """Years with national all-fuels generation, most recent first."""
        history = await self.fetcher.fetch_generation_history(NATIONAL, ALL_FUELS_CODE)
        years = isolate_years(history)
        logger.info(f"EIA reports annual generation for {len(years)} years.")
        return years

    async def _fetch_value(self, fuel_code: str, region: str, year: int) -> float:
        year_low, year_high = year_window(year)
        rows = await self.fetcher.fetch_generation(fuel_code, region, year_low, year_high)
        value = select_period_value(rows, year, "generation")
        if value is None:
            logger.debug(f"No {fuel_code} generation for {region} in {year}; using 0.")
            return 0.0
        return value

    async def reconcile(
        self,
        region: str,
        year: int,
        clean: Iterable[str] = DEFAULT_CLEAN_SUBSETS,
    ) -> ReconciledGeneration:
        """Total, per-subset and clean generation for ``region`` in ``year``.

        Args:
            region: Region code from :mod:`genmix.regions`.
            year: Year to report.
            clean: Ids of the subsets currently counted as clean.

        Returns:
            The reconciled generation mix, in GWh.

        Raises:
            ValueError: if the region or a clean subset id is unknown.
            EiaApiError: if any request to the API fails.
        """
        if not is_known_region(region):
            raise ValueError(f"Unknown region: {region!r}")
        classification = validate_classification(clean)

        total_request = self._fetch_value(ALL_FUELS_CODE, region, year)
        subset_requests = [
            asyncio.gather(
                *(self._fetch_value(code, region, year) for code in subset.fuel_codes)
            )
            for subset in self.subsets
        ]
        total, *subset_values = await asyncio.gather(total_request, *subset_requests)

        by_subset = {
            subset.id: float(sum(values))
            for subset, values in zip(self.subsets, subset_values, strict=True)
        }
        logger.info(f"Reconciled {region} {year} generation: {total:,.0f} GWh total.")
        return ReconciledGeneration(
            region=region,
            year=year,
            total=total,
            by_subset=by_subset,
            clean=clean_total(by_subset, classification),
        )
