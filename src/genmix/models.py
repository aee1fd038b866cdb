"""Data models shared by the reconciliation core and the presentation layer.

Three different kinds of "no number" show up in the dashboard data and each one is
modelled explicitly rather than overloading ``None``:

* A generation subset with no reported value for a year is simply zero. This is an
  accepted simplification: true zero and "not reported" can't be told apart.
* A capacity table with no row for a region/technology is :class:`NotReported`. It
  must be displayed as "not available" and never coerced to zero.
* A net import/export balance missing either of its two component series is
  :class:`UnknownFlow`. A missing flow must never read as "no flow".
"""

from collections.abc import Iterable, Mapping
from enum import StrEnum, unique
from typing import Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field


class FrozenBaseModel(BaseModel):
    """BaseModel with global configuration."""

    model_config: ConfigDict = ConfigDict(frozen=True, extra="forbid")


class Present(FrozenBaseModel):
    """A reported numeric value."""

    kind: Literal["present"] = "present"
    value: float


class NotReported(FrozenBaseModel):
    """The source table has no row for this region and technology."""

    kind: Literal["not_reported"] = "not_reported"


class UnknownFlow(FrozenBaseModel):
    """At least one of the import/export series lacks the requested year."""

    kind: Literal["unknown_flow"] = "unknown_flow"


NOT_REPORTED = NotReported()
UNKNOWN_FLOW = UnknownFlow()

CapacityValue = Annotated[Present | NotReported, Field(discriminator="kind")]
NetFlow = Annotated[Present | UnknownFlow, Field(discriminator="kind")]


@unique
class Scenario(StrEnum):
    """NREL siting-restriction scenarios, least to most restrictive."""

    OPEN = "open"
    REFERENCE = "reference"
    LIMITED = "limited"


@unique
class Technology(StrEnum):
    """Technologies covered by the capacity tables."""

    SOLAR = "solar"
    WIND = "wind"
    OFFSHORE_WIND = "offshore_wind"


REGIONAL_TECHNOLOGIES: tuple[Technology, ...] = (Technology.SOLAR, Technology.WIND)
"""Technologies the capacity tables break out by state.

Offshore wind is only reported for the nation as a whole.
"""


@unique
class DisplayUnit(StrEnum):
    """Units that generation and capacity figures can be displayed in."""

    GWH = "GWh"
    GW = "GW"


class GenerationSubset(FrozenBaseModel):
    """A named slice of generation made up of one or more EIA fuel type codes."""

    id: str
    fuel_codes: tuple[str, ...] = Field(min_length=1)
    display_name: str


class Selection(FrozenBaseModel):
    """Everything the user has chosen in the dashboard at one point in time.

    A new selection is created for every change, so a reconciliation can carry the
    exact selection it was issued for.
    """

    region: str
    year: int
    unit: DisplayUnit = DisplayUnit.GWH
    scenario: Scenario = Scenario.LIMITED
    clean: frozenset[str]

    def replace(self: Self, **changes) -> Self:
        """Return a copy of this selection with some fields changed."""
        return self.model_copy(update=changes)


def clean_total(by_subset: Mapping[str, float], clean: Iterable[str]) -> float:
    """Sum the generation of exactly those subsets that are classified as clean."""
    return float(sum(by_subset[subset_id] for subset_id in clean))


class ReconciledGeneration(FrozenBaseModel):
    """Generation for a single region and year, broken out by subset.

    ``total`` comes from EIA's own all-fuels series and is not guaranteed to equal the
    sum of ``by_subset``.
    """

    region: str
    year: int
    total: float
    by_subset: dict[str, float]
    clean: float

    def with_classification(self: Self, clean: Iterable[str]) -> Self:
        """Recompute the clean total for a new classification without refetching."""
        return self.model_copy(update={"clean": clean_total(self.by_subset, clean)})

    @property
    def not_clean(self) -> float:
        """Generation that is not counted as clean."""
        return self.total - self.clean


class CapacityEntry(FrozenBaseModel):
    """Renewable capacity for one region, by scenario and technology."""

    region: str
    capacities: dict[Scenario, dict[Technology, CapacityValue]]

    def get(self, scenario: Scenario, technology: Technology) -> CapacityValue:
        """Look up a capacity, treating technologies without a row as not reported."""
        return self.capacities[scenario].get(technology, NOT_REPORTED)


class CapacityModel(FrozenBaseModel):
    """Capacity entries for every known region plus the national aggregate."""

    per_region: dict[str, CapacityEntry]
    national: CapacityEntry

    def for_region(self, region: str) -> CapacityEntry:
        """Return the national entry for ``US`` and the regional entry otherwise."""
        if region == self.national.region:
            return self.national
        return self.per_region[region]


class RegionSnapshot(FrozenBaseModel):
    """Everything the dashboard displays about one region for one year."""

    generation: ReconciledGeneration
    net_flow: NetFlow
    capacity: CapacityEntry


class DashboardView(FrozenBaseModel):
    """The committed state the presentation layer renders."""

    selection: Selection
    region: RegionSnapshot
    national: RegionSnapshot

    @property
    def is_national(self) -> bool:
        """Whether the selected region is the national aggregate."""
        return self.region.generation.region == self.national.generation.region

    def with_classification(self: Self, clean: frozenset[str]) -> Self:
        """Recompute both clean totals for a new classification."""
        region = self.region.model_copy(
            update={"generation": self.region.generation.with_classification(clean)}
        )
        national = self.national.model_copy(
            update={"generation": self.national.generation.with_classification(clean)}
        )
        return self.model_copy(
            update={
                "selection": self.selection.replace(clean=clean),
                "region": region,
                "national": national,
            }
        )
