"""Settings for talking to the EIA API and locating the capacity tables."""

from pathlib import Path

from pydantic import AnyHttpUrl, DirectoryPath, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from genmix.models import Scenario, Technology


class EiaApiSettings(BaseSettings):
    """Connection settings for the EIA Open Data API v2.

    Configured via ``EIA_*`` environment variables, most importantly ``EIA_API_KEY``.
    A key can be requested for free at https://www.eia.gov/opendata/.
    """

    api_key: str
    base_url: AnyHttpUrl = "https://api.eia.gov/v2"
    timeout: PositiveFloat = 30.0
    """Seconds to wait on any single request before giving up."""
    sector_id: str = "98"
    """All electric power producers: utilities plus independent power producers."""
    page_length: PositiveInt = 5000
    """Maximum number of rows EIA returns for a single request."""

    model_config = SettingsConfigDict(env_prefix="eia_", env_file=".env", extra="ignore")

    @property
    def root(self) -> str:
        """Base URL without a trailing slash."""
        return str(self.base_url).rstrip("/")


class CapacitySettings(BaseSettings):
    """Where the pre-processed NREL capacity tables live.

    The tables are produced outside of this package: NREL supply curves totalled by
    state and converted from MW to GWh/year so they line up with EIA generation.
    Configured via ``GENMIX_CAPACITY_*`` environment variables.
    """

    directory: DirectoryPath
    report_years: str = "2021, 2023"
    """Years the capacity tables were published, for display only."""

    solar_open: str = "solar_open_capacity_2023_NREL_condensed.csv"
    solar_reference: str = "solar_reference_capacity_2023_NREL_condensed.csv"
    solar_limited: str = "solar_limited_capacity_2023_NREL_condensed.csv"
    wind_open: str = "wind_open_capacity_2023_NREL_condensed.csv"
    wind_reference: str = "wind_reference_capacity_2023_NREL_condensed.csv"
    wind_limited: str = "wind_limited_capacity_2023_NREL_condensed.csv"
    offshore_wind: str = "offshore_wind_capacity_2021_NREL_condensed.csv"

    model_config = SettingsConfigDict(
        env_prefix="genmix_capacity_", env_file=".env", extra="ignore"
    )

    def regional_table_paths(self) -> dict[tuple[Scenario, Technology], Path]:
        """Paths to the six state-level tables, keyed by scenario and technology."""
        return {
            (Scenario.OPEN, Technology.SOLAR): self.directory / self.solar_open,
            (Scenario.REFERENCE, Technology.SOLAR): self.directory
            / self.solar_reference,
            (Scenario.LIMITED, Technology.SOLAR): self.directory / self.solar_limited,
            (Scenario.OPEN, Technology.WIND): self.directory / self.wind_open,
            (Scenario.REFERENCE, Technology.WIND): self.directory / self.wind_reference,
            (Scenario.LIMITED, Technology.WIND): self.directory / self.wind_limited,
        }

    @property
    def offshore_table_path(self) -> Path:
        """Path to the national offshore wind table."""
        return self.directory / self.offshore_wind
