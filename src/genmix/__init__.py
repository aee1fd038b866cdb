"""Reconcile EIA electricity generation with NREL renewable capacity by state."""

from importlib.metadata import PackageNotFoundError, version

from . import (  # noqa: F401
    aggregate,
    capacity,
    codes,
    eiaapi,
    helpers,
    logging_helpers,
    models,
    netflow,
    presentation,
    regions,
    session,
    settings,
)

__author__ = "Catalyst Cooperative"
__contact__ = "pudl@catalyst.coop"
__maintainer__ = "Catalyst Cooperative"
__license__ = "MIT License"
try:
    __version__ = version("catalystcoop.genmix")
except PackageNotFoundError:
    __version__ = "unknown"
__docformat__ = "restructuredtext en"
__description__ = "Summaries of U.S. electricity generation mix and renewable capacity."
__long_description__ = """
genmix pulls annual net generation by fuel type and net electricity imports from the
EIA Open Data API, groups the fuels into a handful of generation subsets, and sets
them against NREL estimates of technical solar and wind potential for every state.
Which subsets count as "clean" is left up to the user.
"""
__projecturl__ = "https://github.com/catalyst-cooperative/genmix/"
__downloadurl__ = "https://github.com/catalyst-cooperative/genmix/"
