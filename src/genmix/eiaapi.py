"""Asynchronous access to the EIA Open Data API v2.

Two datasets are used:

* ``electricity/electric-power-operational-data``: annual net generation by fuel
  type and location.
* ``seds``: the State Energy Data System, which reports net electricity imports from
  outside the U.S. (``ELNIP``) and net interstate flows (``ELISP``) by state.

The reconciliation core only depends on the :class:`GenerationFetcher` and
:class:`ImportExportFetcher` protocols, so it can be exercised without a network.
"""

from types import TracebackType
from typing import Any, Protocol, Self

import httpx

import genmix.logging_helpers
from genmix.codes import (
    ALL_FUELS_CODE,
    SEDS_CROSS_BORDER_SERIES,
    SEDS_CROSS_REGION_SERIES,
)
from genmix.regions import NATIONAL
from genmix.settings import EiaApiSettings

logger = genmix.logging_helpers.get_logger(__name__)

Series = list[dict[str, Any]]

GENERATION_ROUTE = "electricity/electric-power-operational-data"
SEDS_ROUTE = "seds"


class EiaApiError(RuntimeError):
    """A request to the EIA API failed or returned something other than data."""


class GenerationFetcher(Protocol):
    """Anything that can return annual generation for a fuel type and region."""

    async def fetch_generation(
        self, fuel_code: str, region: str, year_low: int, year_high: int
    ) -> Series:
        """Return ``{"period": ..., "generation": ...}`` rows for the year range."""
        ...

    async def fetch_generation_history(
        self, region: str = NATIONAL, fuel_code: str = ALL_FUELS_CODE
    ) -> Series:
        """Return every annual row available, most recent first."""
        ...


class ImportExportFetcher(Protocol):
    """Anything that can return the two SEDS net electricity flow series."""

    async def fetch_cross_border(
        self, region: str, year_low: int, year_high: int
    ) -> Series:
        """Return ``{"period": ..., "value": ...}`` rows of net foreign imports."""
        ...

    async def fetch_cross_region(
        self, region: str, year_low: int, year_high: int
    ) -> Series:
        """Return ``{"period": ..., "value": ...}`` rows of net interstate flow."""
        ...


class EiaApiClient:
    """Thin async wrapper around the EIA API v2 ``/data`` endpoints.

    Use it as an async context manager so the underlying connection pool is closed::

        async with EiaApiClient(EiaApiSettings()) as api:
            rows = await api.fetch_generation("WND", "CO", 2021, 2023)
    """

    def __init__(
        self: Self,
        settings: EiaApiSettings,
        client: httpx.AsyncClient | None = None,
    ):
        """Constructs EiaApiClient.

        Args:
            settings: API key, base URL and request defaults.
            client: An existing ``httpx.AsyncClient`` to use instead of creating
                one. The caller keeps ownership of it.
        """
        self.settings = settings
        self._owns_client = client is None
        self.http = client or httpx.AsyncClient(timeout=settings.timeout)

    async def __aenter__(self: Self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            await self.http.aclose()

    async def _get_data(self, route: str, params: dict[str, Any]) -> Series:
        """GET ``<route>/data/`` and return the ``response.data`` array."""
        url = f"{self.settings.root}/{route}/data/"
        query = {"api_key": self.settings.api_key, "frequency": "annual", **params}
        logger.debug(f"Requesting {route} with {params}")
        try:
            response = await self.http.get(url, params=query)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as err:
            raise EiaApiError(
                f"EIA API returned {err.response.status_code} for {route}: "
                f"{err.response.text[:500]}"
            ) from err
        except httpx.HTTPError as err:
            raise EiaApiError(f"Request to EIA API {route} failed: {err}") from err
        except ValueError as err:
            raise EiaApiError(f"EIA API {route} returned invalid JSON.") from err

        if "error" in payload:
            raise EiaApiError(f"EIA API {route} returned an error: {payload['error']}")
        try:
            rows = payload["response"]["data"]
        except (KeyError, TypeError) as err:
            raise EiaApiError(f"EIA API {route} response has no data array.") from err
        logger.debug(f"Received {len(rows)} rows from {route}")
        return rows

    def _generation_params(self, fuel_code: str, region: str) -> dict[str, Any]:
        return {
            "data[0]": "generation",
            "facets[fueltypeid][]": fuel_code,
            "facets[location][]": region,
            "facets[sectorid][]": self.settings.sector_id,
            "offset": 0,
        }

    async def fetch_generation(
        self, fuel_code: str, region: str, year_low: int, year_high: int
    ) -> Series:
        """Annual net generation (GWh) for one fuel type and region."""
        params = self._generation_params(fuel_code, region) | {
            "start": year_low,
            "end": year_high,
        }
        return await self._get_data(GENERATION_ROUTE, params)

    async def fetch_generation_history(
        self, region: str = NATIONAL, fuel_code: str = ALL_FUELS_CODE
    ) -> Series:
        """Every year of annual net generation available, most recent first."""
        params = self._generation_params(fuel_code, region) | {
            "sort[0][column]": "period",
            "sort[0][direction]": "desc",
            "length": self.settings.page_length,
        }
        return await self._get_data(GENERATION_ROUTE, params)

    async def _fetch_seds(
        self, series_id: str, region: str, year_low: int, year_high: int
    ) -> Series:
        params = {
            "data[0]": "value",
            "facets[seriesId][]": series_id,
            "facets[stateId][]": region,
            "offset": 0,
            "start": year_low,
            "end": year_high,
        }
        return await self._get_data(SEDS_ROUTE, params)

    async def fetch_cross_border(
        self, region: str, year_low: int, year_high: int
    ) -> Series:
        """Net electricity imports from outside the U.S. (GWh)."""
        return await self._fetch_seds(
            SEDS_CROSS_BORDER_SERIES, region, year_low, year_high
        )

    async def fetch_cross_region(
        self, region: str, year_low: int, year_high: int
    ) -> Series:
        """Net interstate electricity flow (GWh)."""
        return await self._fetch_seds(
            SEDS_CROSS_REGION_SERIES, region, year_low, year_high
        )

