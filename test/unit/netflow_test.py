"""Unit tests for resolving net electricity imports and exports."""

import asyncio

import pytest

from genmix.eiaapi import EiaApiError
from genmix.models import UNKNOWN_FLOW, Present
from genmix.netflow import ImportExportResolver


@pytest.mark.parametrize(
    "cross_border,cross_region,expected",
    [
        pytest.param({2022: 10.0}, {2022: 25.0}, Present(value=35.0), id="imports"),
        pytest.param({2022: 5.0}, {2022: -40.0}, Present(value=-35.0), id="exports"),
        pytest.param({2022: 0.0}, {2022: 0.0}, Present(value=0.0), id="balanced"),
        pytest.param({2022: 10.0}, {2021: 25.0}, UNKNOWN_FLOW, id="no_cross_region"),
        pytest.param({}, {2022: 25.0}, UNKNOWN_FLOW, id="no_cross_border"),
        pytest.param({2022: None}, {2022: 25.0}, UNKNOWN_FLOW, id="null_value"),
    ],
)
def test_resolve(fake_api, cross_border, cross_region, expected):
    fake_api.cross_border["NY"] = cross_border
    fake_api.cross_region["NY"] = cross_region
    assert asyncio.run(ImportExportResolver(fake_api).resolve("NY", 2022)) == expected


def test_resolve_requests_both_series(fake_api):
    asyncio.run(ImportExportResolver(fake_api).resolve("US", 2020))
    assert sorted(fake_api.calls) == [
        ("cross_border", "US", 2019, 2021),
        ("cross_region", "US", 2019, 2021),
    ]


def test_resolve_unknown_region(fake_api):
    with pytest.raises(ValueError, match="Unknown region"):
        asyncio.run(ImportExportResolver(fake_api).resolve("Narnia", 2022))


def test_resolve_failure(fake_api):
    fake_api.failing.add("ME")
    with pytest.raises(EiaApiError):
        asyncio.run(ImportExportResolver(fake_api).resolve("ME", 2022))


def test_both_series_requested_together(fake_api):
    async def run():
        fake_api.gates["NY"] = asyncio.Event()
        task = asyncio.create_task(ImportExportResolver(fake_api).resolve("NY", 2022))
        for _ in range(5):
            await asyncio.sleep(0)
        in_flight = [call[0] for call in fake_api.calls]
        assert not task.done()
        fake_api.gates["NY"].set()
        await task
        return in_flight

    assert sorted(asyncio.run(run())) == ["cross_border", "cross_region"]
