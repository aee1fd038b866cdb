"""Command line front end for the electricity generation dashboard.

Fetches generation and net flow data from the EIA API for a region and year, combines
it with the NREL capacity tables and prints the dashboard summary. Optionally writes
the generation mix treemap to an HTML file.

The EIA API key is read from the ``EIA_API_KEY`` environment variable and the
directory holding the capacity tables from ``GENMIX_CAPACITY_DIRECTORY``. Both can
also be set in a ``.env`` file.
"""

import asyncio
import pathlib
import sys

import click
import pydantic

import genmix
from genmix.aggregate import GenerationAggregator
from genmix.capacity import read_capacity_tables
from genmix.codes import DEFAULT_CLEAN_SUBSETS, SUBSETS_BY_ID
from genmix.eiaapi import EiaApiClient, EiaApiError
from genmix.models import DisplayUnit, Scenario, Selection
from genmix.netflow import ImportExportResolver
from genmix.presentation import render_summary, treemap_figure
from genmix.regions import NATIONAL, lookup_region
from genmix.session import DashboardSession
from genmix.settings import CapacitySettings, EiaApiSettings

logger = genmix.logging_helpers.get_logger(__name__)


async def _load_session(
    region: str,
    year: int | None,
    unit: DisplayUnit,
    scenario: Scenario,
    clean: frozenset[str],
    api_settings: EiaApiSettings,
    capacity_settings: CapacitySettings,
) -> DashboardSession:
    """Fetch everything needed to display one selection."""
    capacity = read_capacity_tables(capacity_settings)
    async with EiaApiClient(api_settings) as api:
        aggregator = GenerationAggregator(api)
        years = await aggregator.available_years()
        if year is None:
            year = years[0]
        elif year not in years:
            raise click.BadParameter(
                f"EIA has no generation data for {year}. "
                f"Available years: {years[-1]}-{years[0]}.",
                param_hint="--year",
            )
        session = DashboardSession(
            aggregator,
            ImportExportResolver(api),
            capacity,
            years=years,
            selection=Selection(
                region=region, year=year, unit=unit, scenario=scenario, clean=clean
            ),
        )
        await session.refresh()
    return session


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--region",
    default=NATIONAL,
    show_default=True,
    help="State code or name, or US for the whole country.",
)
@click.option(
    "--year",
    type=int,
    default=None,
    help="Year to report. Defaults to the most recent year EIA has data for.",
)
@click.option(
    "--unit",
    type=click.Choice([u.value for u in DisplayUnit]),
    default=DisplayUnit.GWH.value,
    show_default=True,
    help="Show annual energy (GWh) or average power (GW).",
)
@click.option(
    "--scenario",
    type=click.Choice([s.value for s in Scenario]),
    default=Scenario.LIMITED.value,
    show_default=True,
    help="NREL capacity siting-restriction scenario.",
)
@click.option(
    "--clean",
    "clean",
    multiple=True,
    type=click.Choice(list(SUBSETS_BY_ID)),
    help="Generation subset to count as clean. Repeat for several. "
    f"Defaults to: {', '.join(sorted(DEFAULT_CLEAN_SUBSETS))}.",
)
@click.option(
    "--treemap",
    type=click.Path(dir_okay=False, writable=True, path_type=pathlib.Path),
    default=None,
    help="If specified, write the generation mix treemap to this HTML file.",
)
@click.option(
    "--logfile",
    help="If specified, write logs to this file.",
    type=click.Path(
        exists=False,
        resolve_path=True,
        path_type=pathlib.Path,
    ),
)
@click.option(
    "--loglevel",
    default="INFO",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
)
def genmix_summary(
    region: str,
    year: int | None,
    unit: str,
    scenario: str,
    clean: tuple[str, ...],
    treemap: pathlib.Path | None,
    logfile: pathlib.Path | None,
    loglevel: str,
):
    """Summarize U.S. electricity generation, net flows and renewable capacity.

    Summarize the most recent year for the whole country:

    genmix_summary

    Show Colorado in 2022 as average power, counting only wind and solar as clean:

    genmix_summary --region CO --year 2022 --unit GW --clean wind --clean solar

    Also write the generation mix treemap to a file:

    genmix_summary --region Texas --treemap texas.html
    """
    genmix.logging_helpers.configure_root_logger(logfile=logfile, loglevel=loglevel)

    try:
        region_code = lookup_region(region)["code"]
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="--region") from err

    capacity_settings = CapacitySettings()
    session = asyncio.run(
        _load_session(
            region=region_code,
            year=year,
            unit=DisplayUnit(unit),
            scenario=Scenario(scenario),
            clean=frozenset(clean) or DEFAULT_CLEAN_SUBSETS,
            api_settings=EiaApiSettings(),
            capacity_settings=capacity_settings,
        )
    )
    click.echo(render_summary(session.view, capacity_settings.report_years))
    if treemap is not None:
        treemap_figure(session.view).write_html(treemap)
        logger.info(f"Wrote generation mix treemap to {treemap}")
    return 0


def main():
    """Run the command, turning EIA API failures into a non-zero exit status."""
    try:
        return genmix_summary(standalone_mode=False)
    except EiaApiError as err:
        logger.error(f"Could not retrieve data from the EIA API: {err}")
        return 1
    except pydantic.ValidationError as err:
        logger.error(
            "Set EIA_API_KEY and GENMIX_CAPACITY_DIRECTORY, or put them in a .env "
            f"file. Error: {err}"
        )
        return 1
    except click.ClickException as err:
        err.show()
        return err.exit_code
    except click.exceptions.Abort:
        return 1


if __name__ == "__main__":
    sys.exit(main())
