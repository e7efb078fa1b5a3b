"""
Tests for the trace session driver.
"""

import io
from datetime import datetime, timedelta, timezone

import pytest

from tracegen import (
    CollisionWarning,
    InputError,
    OutputError,
    TraceConfig,
    advance_clock,
    build_trajectory,
    decode,
    iter_sentences,
    open_sink,
    run_trace,
    validate_sentence,
    write_trace,
)


class TestClock:
    """Test suite for the simulated clock."""

    def test_advance(self, start_time):
        """Test that the clock moves by exactly one interval."""
        assert advance_clock(start_time, 1.0) == start_time + timedelta(seconds=1)
        assert advance_clock(start_time, 0.25) == start_time + timedelta(milliseconds=250)

    def test_first_fix_at_start_time(self, straight_trajectory, start_time):
        """Test that stamping starts at the start time and steps per fix."""
        lines = list(iter_sentences(straight_trajectory[:3], start_time, 1.0))
        assert [line.split(",")[1] for line in lines] == ["083005", "083006", "083007"]

    def test_date_rollover(self, straight_trajectory):
        """Test that time and date roll over at midnight."""
        start = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        lines = list(iter_sentences(straight_trajectory[:2], start, 1.0))
        first, second = (line.split(",") for line in lines)
        assert (first[1], first[9]) == ("235959", "311224")
        assert (second[1], second[9]) == ("000000", "010125")


class TestBuildTrajectory:
    """Test suite for trajectory assembly."""

    def test_without_collision(self, equator_polyline):
        """Test the two-point route end to end."""
        config = TraceConfig(vehicle_speed_kmph=36.0, sample_interval_s=10.0)
        trajectory = build_trajectory(decode(equator_polyline), config)
        assert len(trajectory) == 12
        assert all(fix.secondary is None for fix in trajectory)

    def test_out_of_range_collision_matches_plain_run(self, equator_polyline, start_time):
        """Test that an unplaceable collision produces the plain trace."""
        segments = decode(equator_polyline)
        plain = build_trajectory(segments, TraceConfig(vehicle_speed_kmph=36.0, sample_interval_s=10.0))
        with pytest.warns(CollisionWarning):
            late = build_trajectory(
                segments,
                TraceConfig(vehicle_speed_kmph=36.0, sample_interval_s=10.0, collision_after_s=500.0),
            )

        assert list(iter_sentences(late, start_time, 10.0)) == list(iter_sentences(plain, start_time, 10.0))

    def test_verbose_reports_segments(self, equator_polyline, capsys):
        """Test that verbose mode prints segment details to stderr."""
        config = TraceConfig(vehicle_speed_kmph=36.0, sample_interval_s=10.0, verbose=True)
        build_trajectory(decode(equator_polyline), config)
        captured = capsys.readouterr()
        assert "11 step(s)" in captured.err
        assert captured.out == ""


class TestSink:
    """Test suite for output sinks."""

    def test_write_trace(self):
        """Test that every record gets its own line."""
        buffer = io.StringIO()
        assert write_trace(["$A*00", "$B*00"], buffer) == 2
        assert buffer.getvalue() == "$A*00\n$B*00\n"

    def test_write_failure(self, broken_sink):
        """Test that a failing write is an output error."""
        with pytest.raises(OutputError, match="Broken pipe"):
            write_trace(["$A*00", "$B*00"], broken_sink)

    def test_file_truncated(self, tmp_path):
        """Test that an existing output file is replaced."""
        path = tmp_path / "out.nmea"
        path.write_text("old content\n" * 10)
        with open_sink(path) as sink:
            sink.write("new\n")
        assert path.read_text() == "new\n"

    def test_file_closed_on_error(self, tmp_path):
        """Test that the file is closed when the run fails midway."""
        path = tmp_path / "out.nmea"
        with pytest.raises(RuntimeError):
            with open_sink(path) as sink:
                sink.write("partial\n")
                raise RuntimeError("boom")
        assert sink.closed
        assert path.read_text() == "partial\n"

    def test_unwritable_destination(self, tmp_path):
        """Test that an uncreatable file is an output error."""
        with pytest.raises(OutputError):
            with open_sink(tmp_path / "missing" / "out.nmea"):
                pass


class TestRunTrace:
    """Test suite for complete runs."""

    def test_run_to_file(self, route_file, tmp_path, start_time):
        """Test a full run written to a file."""
        output = tmp_path / "trace.nmea"
        config = TraceConfig(
            route_file=route_file,
            vehicle_speed_kmph=36.0,
            sample_interval_s=10.0,
            output_path=output,
            start_time=start_time,
        )

        assert run_trace(config) == 12

        lines = output.read_text().splitlines()
        assert len(lines) == 12
        assert all(validate_sentence(line) for line in lines)
        assert lines[0].split(",")[1] == "083005"
        assert lines[1].split(",")[1] == "083015"
        assert lines[0].split(",")[7:9] == ["019.4", "090.0"]

    def test_run_with_collision(self, route_file, tmp_path, start_time):
        """Test that collision records carry two sentences."""
        output = tmp_path / "trace.nmea"
        config = TraceConfig(
            route_file=route_file,
            vehicle_speed_kmph=36.0,
            sample_interval_s=1.0,
            output_path=output,
            collision_after_s=30.0,
            start_time=start_time,
        )
        run_trace(config)

        lines = output.read_text().splitlines()
        paired = [i for i, line in enumerate(lines) if ";" in line]
        assert paired == list(range(21, 31))
        for i in paired:
            vehicle, pedestrian = lines[i].split(";")
            assert validate_sentence(vehicle) and validate_sentence(pedestrian)
        assert lines[30].split(";")[0].split(",")[3:7] == lines[30].split(";")[1].split(",")[3:7]

    def test_missing_route_writes_nothing(self, tmp_path):
        """Test that a missing route aborts before the output is created."""
        output = tmp_path / "trace.nmea"
        config = TraceConfig(route_file=tmp_path / "missing.txt", output_path=output)
        with pytest.raises(InputError):
            run_trace(config)
        assert not output.exists()

    def test_invalid_route_writes_nothing(self, tmp_path):
        """Test that undecodable content aborts before output."""
        route = tmp_path / "bad.txt"
        route.write_text("not a polyline!")
        output = tmp_path / "trace.nmea"
        with pytest.raises(InputError):
            run_trace(TraceConfig(route_file=route, output_path=output))
        assert not output.exists()
