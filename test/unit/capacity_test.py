"""Unit tests for loading the NREL capacity tables."""

import logging

import pytest

from genmix.capacity import load_capacity_tables, read_capacity_tables
from genmix.models import NOT_REPORTED, Present, Scenario, Technology
from genmix.settings import CapacitySettings


def test_regional_values(capacity_model):
    colorado = capacity_model.for_region("CO")
    assert colorado.get(Scenario.OPEN, Technology.SOLAR) == Present(value=100.0)
    assert colorado.get(Scenario.OPEN, Technology.WIND) == Present(value=50.0)
    assert colorado.get(Scenario.REFERENCE, Technology.SOLAR) == Present(value=50.0)


def test_absent_region_is_not_reported(capacity_model):
    """Vermont has wind rows but no solar rows, and Utah has no rows at all."""
    vermont = capacity_model.for_region("VT")
    assert vermont.get(Scenario.OPEN, Technology.SOLAR) == NOT_REPORTED
    assert vermont.get(Scenario.OPEN, Technology.WIND) == Present(value=10.0)
    utah = capacity_model.for_region("UT")
    for scenario in Scenario:
        assert utah.get(scenario, Technology.SOLAR) == NOT_REPORTED
        assert utah.get(scenario, Technology.WIND) == NOT_REPORTED


def test_offshore_is_national_only(capacity_model):
    assert (
        capacity_model.for_region("TX").get(Scenario.OPEN, Technology.OFFSHORE_WIND)
        == NOT_REPORTED
    )
    national = capacity_model.for_region("US")
    assert national.get(Scenario.OPEN, Technology.OFFSHORE_WIND) == Present(
        value=900.0
    )
    assert national.get(Scenario.LIMITED, Technology.OFFSHORE_WIND) == Present(
        value=300.0
    )


def test_national_sums_reported_regions(capacity_model):
    national = capacity_model.national
    assert national.region == "US"
    assert national.get(Scenario.OPEN, Technology.SOLAR) == Present(value=500.0)
    assert national.get(Scenario.OPEN, Technology.WIND) == Present(value=360.0)


def test_national_ignores_missing_regions(make_capacity_table):
    """A=10, B absent and C=5 gives a national total of 15."""
    tables = {
        (scenario, technology): make_capacity_table([])
        for scenario in Scenario
        for technology in (Technology.SOLAR, Technology.WIND)
    }
    tables[(Scenario.LIMITED, Technology.SOLAR)] = make_capacity_table(
        [("Arizona", 10.0), ("Colorado", 5.0)]
    )
    model = load_capacity_tables(tables, make_capacity_table([]))

    assert model.for_region("CA").get(Scenario.LIMITED, Technology.SOLAR) == (
        NOT_REPORTED
    )
    assert model.national.get(Scenario.LIMITED, Technology.SOLAR) == Present(
        value=15.0
    )
    # Nothing reported at all still gives a derivable national value of zero.
    assert model.national.get(Scenario.OPEN, Technology.WIND) == Present(value=0.0)
    assert model.national.get(Scenario.OPEN, Technology.OFFSHORE_WIND) == NOT_REPORTED


def test_unknown_and_non_numeric_rows(make_capacity_table, caplog):
    tables = {
        (Scenario.OPEN, Technology.SOLAR): make_capacity_table(
            [("Total", 999.0), ("Utah", "n/a"), ("D.C.", "1.5")]
        )
    }
    with caplog.at_level(logging.WARNING, logger="catalystcoop"):
        model = load_capacity_tables(tables, make_capacity_table([("open", None)]))

    assert model.for_region("UT").get(Scenario.OPEN, Technology.SOLAR) == (
        NOT_REPORTED
    )
    assert model.for_region("DC").get(Scenario.OPEN, Technology.SOLAR) == Present(
        value=1.5
    )
    assert model.national.get(Scenario.OPEN, Technology.SOLAR) == Present(value=1.5)
    assert model.national.get(Scenario.OPEN, Technology.OFFSHORE_WIND) == NOT_REPORTED
    assert "Utah" in caplog.text


def test_non_numeric_offshore_value(make_capacity_table, caplog):
    offshore = make_capacity_table([("open", "n/a"), ("limited", "42")])
    with caplog.at_level(logging.WARNING, logger="catalystcoop"):
        model = load_capacity_tables({}, offshore)

    assert model.national.get(Scenario.OPEN, Technology.OFFSHORE_WIND) == NOT_REPORTED
    assert model.national.get(Scenario.LIMITED, Technology.OFFSHORE_WIND) == Present(
        value=42.0
    )
    assert "open/offshore_wind" in caplog.text


def test_offshore_is_not_a_regional_table(make_capacity_table):
    tables = {(Scenario.OPEN, Technology.OFFSHORE_WIND): make_capacity_table([])}
    with pytest.raises(ValueError, match="isn't reported by state"):
        load_capacity_tables(tables, make_capacity_table([]))


def test_read_capacity_tables(tmp_path):
    settings = CapacitySettings(directory=tmp_path)
    for (scenario, technology), path in settings.regional_table_paths().items():
        value = 10.0 if technology == Technology.SOLAR else 20.0
        path.write_text(f",state,capacity\n0,Colorado,{value}\n1,Nevada,1.0\n")
    settings.offshore_table_path.write_text(
        ",scenario,capacity\n0,open,3.0\n1,reference,2.0\n2,limited,1.0\n"
    )

    model = read_capacity_tables(settings)

    nevada = model.for_region("NV")
    assert nevada.get(Scenario.REFERENCE, Technology.WIND) == Present(value=1.0)
    assert model.national.get(Scenario.LIMITED, Technology.WIND) == Present(
        value=21.0
    )
    assert model.national.get(Scenario.REFERENCE, Technology.OFFSHORE_WIND) == (
        Present(value=2.0)
    )
