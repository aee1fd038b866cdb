"""The dashboard session: current selection, committed view and in-memory caches.

Every change of region or year triggers a refresh that may take a while to come back,
and nothing stops the user from changing the selection again in the meantime. Each
refresh is therefore numbered and carries the selection it was issued for. A refresh
only commits its results if it is still the most recent one and the selection still
asks for the same region and year. Anything else is discarded.

Changing the display unit, capacity scenario or clean classification never touches
the network. Clean totals are recomputed from the per-subset values already held in
the committed view.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Self

import genmix.logging_helpers
from genmix.aggregate import GenerationAggregator
from genmix.codes import DEFAULT_CLEAN_SUBSETS, SUBSETS_BY_ID, validate_classification
from genmix.models import (
    CapacityModel,
    DashboardView,
    DisplayUnit,
    NetFlow,
    ReconciledGeneration,
    RegionSnapshot,
    Scenario,
    Selection,
)
from genmix.netflow import ImportExportResolver
from genmix.regions import NATIONAL, is_known_region

logger = genmix.logging_helpers.get_logger(__name__)


class DashboardSession:
    """Owns the user's selection and the data currently on display."""

    def __init__(
        self,
        aggregator: GenerationAggregator,
        resolver: ImportExportResolver,
        capacity: CapacityModel,
        years: Iterable[int],
        selection: Selection | None = None,
    ):
        """Constructs DashboardSession.

        Args:
            aggregator: Source of reconciled generation.
            resolver: Source of net import/export flows.
            capacity: Capacity entries loaded at startup.
            years: Years that can be selected, most recent first.
            selection: Initial selection. Defaults to the whole U.S. in the most
                recent year with the default clean classification.
        """
        self.aggregator = aggregator
        self.resolver = resolver
        self.capacity = capacity
        self.years = list(years)
        if not self.years:
            raise ValueError("At least one year of generation data is required.")
        self.selection = selection or Selection(
            region=NATIONAL, year=self.years[0], clean=DEFAULT_CLEAN_SUBSETS
        )
        self.view: DashboardView | None = None

        self._generation: dict[tuple[str, int], asyncio.Future] = {}
        self._net_flows: dict[tuple[str, int], asyncio.Future] = {}
        self._latest_request = 0

    @classmethod
    async def initialize(
        cls,
        aggregator: GenerationAggregator,
        resolver: ImportExportResolver,
        capacity: CapacityModel,
    ) -> Self:
        """Look up the available years and load the national view for the latest."""
        years = await aggregator.available_years()
        session = cls(aggregator, resolver, capacity, years)
        await session.refresh()
        return session

    @staticmethod
    def _cached(
        cache: dict[tuple[str, int], asyncio.Future],
        key: tuple[str, int],
        fetch: Callable[[], Awaitable],
    ) -> Awaitable:
        """Share one fetch per key between every refresh that needs it.

        The task is cached as soon as it starts, so overlapping refreshes wait on the
        same requests. A task that fails or is cancelled is dropped from the cache and
        the next refresh starts over.
        """
        task = cache.get(key)
        if task is None or (
            task.done() and (task.cancelled() or task.exception() is not None)
        ):
            task = asyncio.ensure_future(fetch())
            cache[key] = task

            def evict_failed(done: asyncio.Future) -> None:
                if cache.get(key) is done and (
                    done.cancelled() or done.exception() is not None
                ):
                    logger.debug(f"Dropping failed request for {key} from the cache.")
                    del cache[key]

            task.add_done_callback(evict_failed)
        # Cancelling one waiter leaves the shared task running for the others.
        return asyncio.shield(task)

    async def _reconciled(self, region: str, year: int) -> ReconciledGeneration:
        clean = self.selection.clean
        return await self._cached(
            self._generation,
            (region, year),
            lambda: self.aggregator.reconcile(region, year, clean),
        )

    async def _net_flow(self, region: str, year: int) -> NetFlow:
        return await self._cached(
            self._net_flows,
            (region, year),
            lambda: self.resolver.resolve(region, year),
        )

    async def _snapshot(self, region: str, year: int) -> RegionSnapshot:
        generation, net_flow = await asyncio.gather(
            self._reconciled(region, year), self._net_flow(region, year)
        )
        return RegionSnapshot(
            generation=generation,
            net_flow=net_flow,
            capacity=self.capacity.for_region(region),
        )

    async def refresh(self) -> bool:
        """Fetch whatever the current selection needs and commit it if still wanted.

        Returns:
            True if the results were committed, False if a newer selection
            superseded them while they were in flight.

        Raises:
            EiaApiError: if a request fails. The committed view is left as it was.
        """
        self._latest_request += 1
        request = self._latest_request
        issued_for = self.selection
        logger.info(
            f"Refreshing {issued_for.region} {issued_for.year} (request {request})."
        )

        if issued_for.region == NATIONAL:
            region = national = await self._snapshot(NATIONAL, issued_for.year)
        else:
            region, national = await asyncio.gather(
                self._snapshot(issued_for.region, issued_for.year),
                self._snapshot(NATIONAL, issued_for.year),
            )

        current = self.selection
        if request != self._latest_request or (current.region, current.year) != (
            issued_for.region,
            issued_for.year,
        ):
            logger.info(
                f"Discarding stale results for {issued_for.region} {issued_for.year} "
                f"(request {request}, latest {self._latest_request})."
            )
            return False

        self.view = DashboardView(
            selection=current, region=region, national=national
        ).with_classification(current.clean)
        return True

    async def select_region(self, region: str) -> bool:
        """Switch to another state or the national aggregate and refresh."""
        if not is_known_region(region):
            raise ValueError(f"Unknown region: {region!r}")
        self.selection = self.selection.replace(region=region)
        return await self.refresh()

    async def select_year(self, year: int) -> bool:
        """Switch to another year and refresh."""
        if year not in self.years:
            raise ValueError(f"No generation data available for {year}.")
        self.selection = self.selection.replace(year=year)
        return await self.refresh()

    def _update_display(self, **changes) -> None:
        self.selection = self.selection.replace(**changes)
        if self.view is not None:
            self.view = self.view.model_copy(
                update={"selection": self.view.selection.replace(**changes)}
            )

    def set_display_unit(self, unit: DisplayUnit | str) -> None:
        """Show energy (GWh) or average power (GW)."""
        self._update_display(unit=DisplayUnit(unit))

    def set_scenario(self, scenario: Scenario | str) -> None:
        """Choose which capacity restriction scenario to show."""
        self._update_display(scenario=Scenario(scenario))

    def set_classification(self, subset_ids: Iterable[str]) -> None:
        """Replace the set of subsets counted as clean and recompute clean totals."""
        clean = validate_classification(subset_ids)
        self.selection = self.selection.replace(clean=clean)
        if self.view is not None:
            self.view = self.view.with_classification(clean)

    def set_clean(self, subset_id: str, is_clean: bool) -> None:
        """Add a subset to, or remove it from, the clean classification."""
        if subset_id not in SUBSETS_BY_ID:
            raise ValueError(f"Unknown generation subset: {subset_id!r}")
        clean = set(self.selection.clean)
        if is_clean:
            clean.add(subset_id)
        else:
            clean.discard(subset_id)
        self.set_classification(clean)
