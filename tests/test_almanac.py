from __future__ import annotations

from datetime import date

import pytest

import almanac
from fastephem.altitude import GeographicLocation
from fastephem.body import Body
from fastephem.events import EventKind, RiseThreshold


def test_seattle_week(capsys: pytest.CaptureFixture[str]) -> None:
    code = almanac.main(
        ["--lat", "47.6062", "--lon", "-122.3321", "--start", "2018-06-01", "--days", "3", "--tz", "-7"]
    )
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("# sun / sunrise")
    assert len(lines) == 4
    assert lines[1].startswith("2018-06-01  rise 05:1")
    assert lines[3].startswith("2018-06-03  rise 05:1")


def test_polar_day(capsys: pytest.CaptureFixture[str]) -> None:
    almanac.main(
        ["--lat", "78.2232", "--lon", "15.6469", "--start", "2025-06-21", "--threshold", "civil"]
    )
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "2025-06-21  never sets"


def test_moon_defaults_to_moonrise(capsys: pytest.CaptureFixture[str]) -> None:
    almanac.main(["--lat", "47.6", "--lon", "-122.3", "--start", "2018-06-03", "--body", "moon"])
    assert capsys.readouterr().out.startswith("# moon / moonrise")


def test_invalid_latitude_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        almanac.main(["--lat", "95", "--lon", "0"])
    assert excinfo.value.code == 2


def test_invalid_date_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        almanac.main(["--lat", "10", "--lon", "0", "--start", "2018-13-01"])
    assert excinfo.value.code == 2


@pytest.mark.parametrize("tz", ["30", "-24", "24", "east"])
def test_invalid_offset_exits(tz: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        almanac.main(["--lat", "10", "--lon", "0", "--start", "2018-06-01", "--tz", tz])
    assert excinfo.value.code == 2


@pytest.mark.parametrize("jobs", ["0", "many"])
def test_invalid_job_count_exits(jobs: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        almanac.main(["--lat", "10", "--lon", "0", "--start", "2018-06-01", "--jobs", jobs])
    assert excinfo.value.code == 2


def test_default_offset_follows_longitude(capsys: pytest.CaptureFixture[str]) -> None:
    almanac.main(["--lat", "47.6062", "--lon", "-122.3321", "--start", "2018-06-01"])
    header = capsys.readouterr().out.splitlines()[0]
    assert header.endswith("UTC-8")


def test_parallel_matches_inline() -> None:
    location = GeographicLocation(longitude=-122.3321, latitude=47.6062)
    tasks = [
        almanac.DayTask(date(2018, 6, day), Body.sun, RiseThreshold.civil, location, -7.0)
        for day in range(1, 5)
    ]
    inline = almanac.compute_table(tasks, n_jobs=1)
    parallel = almanac.compute_table(tasks, n_jobs=2)
    assert inline == parallel
    assert all(event.kind is EventKind.rises_and_sets for event in inline)


def test_format_row_markers() -> None:
    from fastephem.events import RiseEvent

    assert almanac.format_row(date(2018, 1, 1), RiseEvent(EventKind.never_rises), 0.0) == (
        "2018-01-01  never rises"
    )
    row = almanac.format_row(date(2018, 1, 1), RiseEvent(EventKind.sets, set_time=6574.75), 0.0)
    assert row == "2018-01-01  rise --:--  set 06:00"
