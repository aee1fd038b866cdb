"""Net electricity imports and exports by region.

The net flow for a region is the sum of two SEDS series: net imports from outside the
country and net interstate flow. Positive values are net imports, negative values net
exports. For the U.S. as a whole the interstate series is zero by construction, but it
is summed like any other region.

Unlike generation, a missing value here is *not* zero. If either series lacks the
requested year the net flow is :data:`genmix.models.UNKNOWN_FLOW`.
"""

import asyncio

import genmix.logging_helpers
from genmix.eiaapi import ImportExportFetcher
from genmix.helpers import select_period_value, year_window
from genmix.models import UNKNOWN_FLOW, NetFlow, Present
from genmix.regions import is_known_region

logger = genmix.logging_helpers.get_logger(__name__)


class ImportExportResolver:
    """Combine the cross-border and cross-region flow series into one value."""

    def __init__(self, fetcher: ImportExportFetcher):
        self.fetcher = fetcher

    async def resolve(self, region: str, year: int) -> NetFlow:
        """Net flow into ``region`` during ``year``, or unknown.

        Raises:
            ValueError: if the region is unknown.
            EiaApiError: if either request to the API fails.
        """
        if not is_known_region(region):
            raise ValueError(f"Unknown region: {region!r}")
        year_low, year_high = year_window(year)
        cross_border_rows, cross_region_rows = await asyncio.gather(
            self.fetcher.fetch_cross_border(region, year_low, year_high),
            self.fetcher.fetch_cross_region(region, year_low, year_high),
        )
        cross_border = select_period_value(cross_border_rows, year, "value")
        cross_region = select_period_value(cross_region_rows, year, "value")
        if cross_border is None or cross_region is None:
            logger.info(f"Net electricity flow for {region} in {year} is unknown.")
            return UNKNOWN_FLOW
        return Present(value=cross_border + cross_region)
