"""
Tests for the polyline_to_gprmc command-line entry point.
"""

import contextlib
import warnings

import pytest

import polyline_to_gprmc
import tracegen.session
from polyline_to_gprmc import main
from tracegen import validate_sentence


class TestMain:
    """Test suite for command-line runs."""

    def test_stdout(self, route_file, capsys):
        """Test a run that writes to standard output."""
        status = main([str(route_file), "-s", "36", "-i", "10", "--start-time", "2024-05-01T08:30:05"])
        captured = capsys.readouterr()

        assert status == 0
        lines = captured.out.splitlines()
        assert len(lines) == 12
        assert all(validate_sentence(line) for line in lines)
        assert lines[0].startswith("$GPRMC,083005,A,0000.00000,N,00000.00000,E,019.4,090.0,010524,0,W,*")

    def test_output_file(self, route_file, tmp_path, capsys):
        """Test a run that writes to a file."""
        output = tmp_path / "trace.nmea"
        status = main([str(route_file), "-s", "36", "-i", "10", "-o", str(output)])

        assert status == 0
        assert capsys.readouterr().out == ""
        assert len(output.read_text().splitlines()) == 12

    def test_verbose(self, route_file, tmp_path, capsys):
        """Test that verbose details go to stderr only."""
        output = tmp_path / "trace.nmea"
        main([str(route_file), "-o", str(output), "-c", "30", "-v"])
        captured = capsys.readouterr()

        assert captured.out == ""
        assert "Route file:" in captured.err
        assert "Collision after 30.0 s" in captured.err
        assert "Wrote " in captured.err

    def test_collision_outside_trajectory(self, route_file, capsys):
        """Test that an unplaceable collision warns but the run succeeds."""
        status = main([str(route_file), "-s", "36", "-i", "10", "-c", "1000"])
        captured = capsys.readouterr()

        assert status == 0
        assert len(captured.out.splitlines()) == 12
        assert ";" not in captured.out
        assert "outside trajectory" in captured.err

    def test_missing_route(self, tmp_path, capsys):
        """Test the exit status for a missing route file."""
        status = main([str(tmp_path / "missing.txt")])
        captured = capsys.readouterr()

        assert status == 1
        assert captured.out == ""
        assert captured.err.startswith("Error:")

    def test_unwritable_output(self, route_file, tmp_path, capsys):
        """Test the exit status when the output cannot be created."""
        status = main([str(route_file), "-o", str(tmp_path / "missing" / "trace.nmea")])
        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_option(self, route_file, capsys):
        """Test the exit status for an invalid option value."""
        status = main([str(route_file), "-i", "0"])
        assert status == 1
        assert "interval" in capsys.readouterr().err

    def test_write_failure(self, route_file, broken_sink, monkeypatch, capsys):
        """Test the exit status when the output fails midway."""
        @contextlib.contextmanager
        def failing_sink(output_path=None):
            yield broken_sink

        monkeypatch.setattr(tracegen.session, "open_sink", failing_sink)
        status = main([str(route_file)])

        assert status == 1
        assert "Error: Unable to write trace" in capsys.readouterr().err

    def test_unrelated_warnings_not_reported(self, route_file, monkeypatch, capsys):
        """Test that only collision problems are printed as run warnings."""
        def noisy_run(config):
            warnings.warn("unrelated library notice", UserWarning)
            return 0

        monkeypatch.setattr(polyline_to_gprmc, "run_trace", noisy_run)
        with pytest.warns(UserWarning, match="unrelated library notice"):
            status = main([str(route_file)])

        assert status == 0
        assert not any(line.startswith("Warning:") for line in capsys.readouterr().err.splitlines())
