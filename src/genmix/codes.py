"""EIA code tables used to query and group electricity generation."""

from collections.abc import Iterable

from genmix.models import GenerationSubset

GENERATION_SUBSETS: tuple[GenerationSubset, ...] = (
    GenerationSubset(id="wind", fuel_codes=("WND",), display_name="wind"),
    GenerationSubset(
        id="solar", fuel_codes=("SUN",), display_name="solar (PV & thermal)"
    ),
    GenerationSubset(id="geothermal", fuel_codes=("GEO",), display_name="geothermal"),
    GenerationSubset(id="nuclear", fuel_codes=("NUC",), display_name="nuclear"),
    GenerationSubset(
        id="hydro",
        fuel_codes=("HYC", "HPS"),  # conventional, pumped storage
        display_name="hydroelectric (conventional & pumped storage)",
    ),
    GenerationSubset(id="biomass", fuel_codes=("BIO",), display_name="biomass"),
    GenerationSubset(id="coal", fuel_codes=("COW",), display_name="coal"),
    GenerationSubset(id="natural_gas", fuel_codes=("NG",), display_name="natural gas"),
    GenerationSubset(
        id="other", fuel_codes=("PEL", "PC", "OOG", "OTH"), display_name="other"
    ),
)
"""Generation subsets in display order.

The order is used to assign colours, so it lives in a tuple rather than being read
back out of a mapping.
"""

SUBSETS_BY_ID: dict[str, GenerationSubset] = {s.id: s for s in GENERATION_SUBSETS}

DEFAULT_CLEAN_SUBSETS: frozenset[str] = frozenset(
    {"wind", "solar", "geothermal", "nuclear", "hydro", "biomass"}
)
"""Subsets counted as clean until the user says otherwise."""

ALL_FUELS_CODE: str = "ALL"
"""EIA fuel type code for total generation across every fuel."""

ALL_SECTORS_ELECTRIC_POWER: str = "98"
"""EIA sector code covering all electric power producers (utilities + IPPs)."""

SEDS_CROSS_BORDER_SERIES: str = "ELNIP"
"""SEDS net imports of electricity into the U.S., by state."""

SEDS_CROSS_REGION_SERIES: str = "ELISP"
"""SEDS net interstate flow of electricity. Zero for the U.S. as a whole."""


def validate_classification(subset_ids: Iterable[str]) -> frozenset[str]:
    """Make sure a clean classification only names declared subsets."""
    classification = frozenset(subset_ids)
    if unknown := sorted(classification - SUBSETS_BY_ID.keys()):
        raise ValueError(f"Unknown generation subsets: {unknown}")
    return classification
