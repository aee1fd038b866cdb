"""Turn a committed dashboard view into display strings and a generation treemap.

Nothing in here fetches or mutates data. The functions take a
:class:`genmix.models.DashboardView` and return plain strings, dictionaries or a plotly
figure for whatever front end is doing the drawing.
"""

from typing import Any

import plotly.graph_objects as go

from genmix.codes import GENERATION_SUBSETS, SUBSETS_BY_ID
from genmix.models import (
    CapacityValue,
    DashboardView,
    DisplayUnit,
    NetFlow,
    Present,
    RegionSnapshot,
    Technology,
)

HOURS_PER_YEAR: int = 365 * 24
NOT_AVAILABLE: str = "N/A"

CLEAN_LABEL: str = "Clean Electricity"
NOT_CLEAN_LABEL: str = "Non-Clean Electricity"
BACKGROUND_COLOR: str = "rgb(255, 255, 255)"

CLEAN_COLORS: tuple[str, ...] = (
    "rgb(230, 255, 240)",
    "rgb(210, 240, 220)",
    "rgb(190, 220, 200)",
    "rgb(170, 200, 180)",
    "rgb(150, 180, 160)",
    "rgb(130, 160, 140)",
    "rgb(110, 140, 120)",
    "rgb(90, 120, 100)",
    "rgb(70, 100, 80)",
)
"""Greens, one per generation subset in :data:`GENERATION_SUBSETS` order."""

NOT_CLEAN_COLORS: tuple[str, ...] = (
    "rgb(200, 195, 190)",
    "rgb(180, 175, 170)",
    "rgb(160, 155, 150)",
    "rgb(140, 135, 130)",
    "rgb(120, 115, 110)",
    "rgb(100, 95, 90)",
    "rgb(80, 75, 70)",
    "rgb(60, 55, 50)",
    "rgb(40, 35, 30)",
)
"""Browns with the same lightness steps, so a subset keeps its shade when it moves
between the clean and non-clean sides."""


def format_energy(gwh: float, unit: DisplayUnit) -> str:
    """Format an annual energy figure as GWh, or as average power in GW."""
    if unit == DisplayUnit.GW:
        return f"{gwh / HOURS_PER_YEAR:,.2f} GW"
    return f"{gwh:,.0f} GWh"


def format_percent(numerator: float, denominator: float) -> str:
    """Format a ratio as a percentage with two decimals."""
    if denominator == 0:
        return NOT_AVAILABLE
    return f"{100 * numerator / denominator:,.2f}%"


def format_capacity(capacity: CapacityValue, unit: DisplayUnit) -> str:
    """Format a capacity, showing N/A when the tables have no value for it."""
    if isinstance(capacity, Present):
        return format_energy(capacity.value, unit)
    return NOT_AVAILABLE


def format_net_flow(net_flow: NetFlow, unit: DisplayUnit) -> tuple[str, str]:
    """Describe a net flow as ("imported" | "exported", amount)."""
    if not isinstance(net_flow, Present):
        return "imported", NOT_AVAILABLE
    if net_flow.value < 0:
        return "exported", format_energy(-net_flow.value, unit)
    return "imported", format_energy(net_flow.value, unit)


def _capacity_share(snapshot: RegionSnapshot, view: DashboardView) -> str:
    scenario = view.selection.scenario
    solar = snapshot.capacity.get(scenario, Technology.SOLAR)
    wind = snapshot.capacity.get(scenario, Technology.WIND)
    if not (isinstance(solar, Present) and isinstance(wind, Present)):
        return NOT_AVAILABLE
    return format_percent(solar.value + wind.value, snapshot.generation.total)


def summarize_region(
    snapshot: RegionSnapshot, view: DashboardView, with_offshore: bool = False
) -> dict[str, str]:
    """Display strings for one region's generation, net flow and capacity."""
    unit = view.selection.unit
    scenario = view.selection.scenario
    generation = snapshot.generation
    direction, amount = format_net_flow(snapshot.net_flow, unit)
    summary = {
        "region": generation.region,
        "total_generation": format_energy(generation.total, unit),
        "clean_generation": format_energy(generation.clean, unit),
        "clean_percent": format_percent(generation.clean, generation.total),
        "net_flow_direction": direction,
        "net_flow": amount,
        "solar_capacity": format_capacity(
            snapshot.capacity.get(scenario, Technology.SOLAR), unit
        ),
        "wind_capacity": format_capacity(
            snapshot.capacity.get(scenario, Technology.WIND), unit
        ),
        "capacity_percent": _capacity_share(snapshot, view),
    }
    if with_offshore:
        summary["offshore_wind_capacity"] = format_capacity(
            snapshot.capacity.get(scenario, Technology.OFFSHORE_WIND), unit
        )
    return summary


def summarize(view: DashboardView) -> dict[str, dict[str, str]]:
    """Display strings for the national aggregate and, if selected, a state."""
    out = {"national": summarize_region(view.national, view, with_offshore=True)}
    if not view.is_national:
        out["region"] = summarize_region(view.region, view)
    return out


def _render_block(summary: dict[str, str], label: str) -> list[str]:
    lines = [
        f"{label} total generation: {summary['total_generation']}",
        f"{label} clean generation: {summary['clean_generation']} "
        f"({summary['clean_percent']})",
        f"({label} {summary['net_flow_direction']}: {summary['net_flow']})",
        f"{label} solar capacity: {summary['solar_capacity']}",
        f"{label} wind capacity: {summary['wind_capacity']}",
        f"{label} solar + wind capacity as share of generation: "
        f"{summary['capacity_percent']}",
    ]
    if "offshore_wind_capacity" in summary:
        lines.append(
            f"({label} offshore wind capacity: {summary['offshore_wind_capacity']})"
        )
    return lines


def render_summary(view: DashboardView, capacity_years: str | None = None) -> str:
    """Multi-line text summary of the view, national figures first."""
    selection = view.selection
    region_name = "US" if view.is_national else selection.region
    lines = [f"Electricity Generation in {region_name} in {selection.year}:"]
    summaries = summarize(view)
    lines += _render_block(summaries["national"], "US")
    if "region" in summaries:
        lines.append("")
        lines += _render_block(summaries["region"], selection.region)
    if capacity_years:
        lines += ["", f"Capacities: NREL {capacity_years} Electricity Capacity Data"]
    return "\n".join(lines)


def subset_color(subset_id: str, is_clean: bool) -> str:
    """Colour for a subset, green if it's counted as clean and brown otherwise."""
    position = [s.id for s in GENERATION_SUBSETS].index(subset_id)
    palette = CLEAN_COLORS if is_clean else NOT_CLEAN_COLORS
    return palette[position % len(palette)]


def build_treemap(view: DashboardView) -> dict[str, Any]:
    """Two-level hierarchy of the selected region's generation mix.

    The first level splits clean from non-clean generation, the second holds one leaf
    per subset, largest first. Subsets with zero or negative generation are left out:
    negative values can't be drawn as an area and zero ones only add clutter.
    """
    clean = view.selection.clean
    region = view.region.generation
    national = view.national.generation
    branches = {
        True: {"name": CLEAN_LABEL, "children": []},
        False: {"name": NOT_CLEAN_LABEL, "children": []},
    }
    for subset in GENERATION_SUBSETS:
        value = region.by_subset[subset.id]
        if value <= 0:
            continue
        is_clean = subset.id in clean
        branches[is_clean]["children"].append(
            {
                "id": subset.id,
                "name": subset.display_name,
                "value": value,
                "national_value": national.by_subset[subset.id],
                "is_clean": is_clean,
                "color": subset_color(subset.id, is_clean),
            }
        )
    for branch in branches.values():
        branch["children"].sort(key=lambda leaf: leaf["value"], reverse=True)
    return {
        "name": f"Electricity Generation In {region.region} By Subparts",
        "children": [branches[True], branches[False]],
    }


def treemap_leaves(hierarchy: dict[str, Any]) -> list[dict[str, Any]]:
    """All leaves of a treemap hierarchy, clean branch first."""
    return [leaf for branch in hierarchy["children"] for leaf in branch["children"]]


def describe_leaf(view: DashboardView, leaf: dict[str, Any]) -> list[str]:
    """Tooltip lines for one treemap leaf."""
    unit = view.selection.unit
    generation = view.region.generation
    lines = [
        SUBSETS_BY_ID[leaf["id"]].display_name,
        format_energy(leaf["value"], unit),
        f"{format_percent(leaf['value'], generation.total)} of total",
    ]
    if leaf["is_clean"]:
        lines.append(f"{format_percent(leaf['value'], generation.clean)} of clean")
    else:
        lines.append(
            f"{format_percent(leaf['value'], generation.not_clean)} of non-clean"
        )
    if not view.is_national:
        lines.append(
            f"{format_percent(leaf['value'], leaf['national_value'])} of US "
            f"{SUBSETS_BY_ID[leaf['id']].display_name}"
        )
    return lines


def treemap_figure(view: DashboardView) -> go.Figure:
    """Render the generation mix treemap with plotly."""
    hierarchy = build_treemap(view)
    unit = view.selection.unit
    root = hierarchy["name"]
    ids, labels, parents, values, colors, hovertext = [], [], [], [], [], []

    def add_node(node_id, label, parent, value, color, hover):
        ids.append(node_id)
        labels.append(label)
        parents.append(parent)
        values.append(value)
        colors.append(color)
        hovertext.append(hover)

    total = sum(leaf["value"] for leaf in treemap_leaves(hierarchy))
    add_node(root, root, "", total, BACKGROUND_COLOR, format_energy(total, unit))
    for branch in hierarchy["children"]:
        branch_value = sum(leaf["value"] for leaf in branch["children"])
        add_node(
            branch["name"],
            branch["name"],
            root,
            branch_value,
            BACKGROUND_COLOR,
            format_energy(branch_value, unit),
        )
        for leaf in branch["children"]:
            share = format_percent(leaf["value"], view.region.generation.total)
            add_node(
                leaf["id"],
                f"{leaf['name']}, {share}",
                branch["name"],
                leaf["value"],
                leaf["color"],
                "<br>".join(describe_leaf(view, leaf)),
            )

    return go.Figure(
        go.Treemap(
            ids=ids,
            labels=labels,
            parents=parents,
            values=values,
            branchvalues="total",
            marker={"colors": colors},
            hovertext=hovertext,
            hoverinfo="text",
            sort=False,
        ),
        layout={"title": {"text": root}},
    )
