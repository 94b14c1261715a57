"""
Unit tests for the command-line interface.

Captures are replayed from files or from a mocked jcmd, so no JVM is needed.
"""

import os
import re
from unittest.mock import patch

import pytest

from heapdiff.cli.main import build_parser, main_cli, parse_filter_arguments
from heapdiff.validation import ValidationError


@pytest.fixture
def capture_files(temp_dir, capture_utils, sample_rows, grown_rows):
    before = temp_dir / "before.txt"
    after = temp_dir / "after.txt"
    before.write_text("\n".join(capture_utils.build_capture(sample_rows)), encoding="utf-8")
    after.write_text("\n".join(capture_utils.build_capture(grown_rows)), encoding="utf-8")
    return before, after


@pytest.fixture
def report_config(config_file, temp_dir):
    """A config.toml writing reports under the test directory."""
    return config_file(f'[report]\noutput_dir = "{temp_dir / "reports"}"\ntop_n = 10\n')


@pytest.mark.unit
class TestParseFilterArguments:
    """Test cases for --filter values."""

    def test_names_and_wildcards_pass_through(self):
        assert parse_filter_arguments(["String", "java.util.*"]) == ["String", "java.util.*"]

    def test_regex_prefix(self):
        criteria = parse_filter_arguments(["re:HashMap\\$Node"])

        assert isinstance(criteria[0], re.Pattern)
        assert criteria[0].pattern == "HashMap\\$Node"

    def test_invalid_regex(self):
        with pytest.raises(ValidationError):
            parse_filter_arguments(["re:("])

    def test_no_filters(self):
        assert parse_filter_arguments(None) == []


@pytest.mark.unit
class TestBuildParser:
    """Test cases for argument parsing."""

    def test_diff_arguments(self):
        args = build_parser().parse_args(["diff", "a.txt", "b.txt", "-t", "5", "-f", "String", "-f", "int[]"])

        assert args.command == "diff"
        assert args.top == "5"
        assert args.filter == ["String", "int[]"]

    def test_pid_and_pattern_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["snapshot", "--pid", "1", "--pattern", "Main"])

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


@pytest.mark.unit
class TestDiffCommand:
    """Test cases for `heapdiff diff`."""

    def test_prints_sorted_diff(self, capture_files, report_config, capsys):
        before, after = capture_files
        main_cli(["--config", str(report_config), "diff", str(before), str(after)])

        out = capsys.readouterr().out
        assert (
            "class,instances,size\n"
            "byte[],20000,640000\n"
            "String,20000,480000\n"
            "Object[],1,80016\n"
            "java.util.ArrayList,1,24"
        ) in out
        assert "Total: 1200040 bytes in 4 classes" in out

    def test_top_and_filter(self, capture_files, report_config, capsys):
        before, after = capture_files
        main_cli(
            ["--config", str(report_config), "diff", str(before), str(after), "--top", "1", "-f", "java.util.*", "-f", "String"]
        )

        out = capsys.readouterr().out
        assert "String,20000,480000" in out
        assert "java.util.ArrayList" not in out
        assert "Total: 480024 bytes in 2 classes" in out

    def test_saves_report(self, capture_files, report_config, temp_dir):
        before, after = capture_files
        main_cli(["--config", str(report_config), "diff", str(before), str(after), "-o", "run1"])

        report = temp_dir / "reports" / "run1.csv"
        assert report.read_text(encoding="utf-8").startswith("class,instances,size\nbyte[],20000,640000\n")

    @patch("heapdiff.cli.main.plot_histogram")
    def test_plot(self, mock_plot, capture_files, report_config, temp_dir):
        before, after = capture_files
        main_cli(["--config", str(report_config), "diff", str(before), str(after), "--plot", "-o", "run2"])

        mock_plot.assert_called_once()
        args, kwargs = mock_plot.call_args
        assert args[1] == temp_dir / "reports"
        assert args[2] == "run2"
        assert kwargs["top_n"] == 10

    def test_missing_capture_file(self, temp_dir, report_config):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "diff", str(temp_dir / "a.txt"), str(temp_dir / "b.txt")])
        assert exc_info.value.code == 1

    def test_malformed_capture(self, temp_dir, report_config, capture_files):
        _, after = capture_files
        broken = temp_dir / "broken.txt"
        broken.write_text("12345:\nnot a histogram\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "diff", str(broken), str(after)])
        assert exc_info.value.code == 1

    def test_invalid_top(self, capture_files, report_config):
        before, after = capture_files
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "diff", str(before), str(after), "--top", "zero"])
        assert exc_info.value.code == 1

    def test_missing_config(self, capture_files, temp_dir):
        before, after = capture_files
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(temp_dir / "nope.toml"), "diff", str(before), str(after)])
        assert exc_info.value.code == 1

    def test_storage_not_a_table(self, capture_files, config_file):
        before, after = capture_files
        path = config_file('[report]\nstorage = "parquet"\n')

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(path), "diff", str(before), str(after)])
        assert exc_info.value.code == 1

    def test_instance_total_is_printed(self, capture_files, report_config, capsys):
        before, after = capture_files
        main_cli(["--config", str(report_config), "diff", str(before), str(after)])

        assert "Total: 1200040 bytes in 4 classes (40002 instances)" in capsys.readouterr().out


@pytest.mark.unit
class TestLiveCommands:
    """Test cases for `heapdiff snapshot` and `heapdiff watch` with jcmd mocked."""

    @pytest.fixture(autouse=True)
    def running_pid(self):
        with patch("heapdiff.cli.main.is_process_running", return_value=True) as mock_running:
            yield mock_running

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_snapshot(self, mock_run, mock_check, sample_capture, report_config, capsys):
        mock_run.return_value = (0, "\n".join(sample_capture), "")

        main_cli(["--config", str(report_config), "snapshot", "--pid", "12345", "--top", "2"])

        out = capsys.readouterr().out
        assert "class,instances,size\nbyte[],60452,4351184\nString,58211,1397064\n" in out
        mock_run.assert_called_once_with(["jcmd", "12345", "GC.class_histogram"], timeout=60.0)

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_watch(self, mock_run, mock_check, capture_utils, sample_rows, grown_rows, report_config, capsys):
        mock_run.side_effect = [
            (0, "\n".join(capture_utils.build_capture(sample_rows)), ""),
            (0, "\n".join(capture_utils.build_capture(grown_rows)), ""),
        ]

        main_cli(["--config", str(report_config), "watch", "--pid", "12345", "--wait", "0", "-f", "String"])

        out = capsys.readouterr().out
        assert "String,20000,480000" in out
        assert mock_run.call_count == 2

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.factory.find_jvm_pid", return_value=4242)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_snapshot_by_pattern(self, mock_run, mock_find, mock_check, sample_capture, report_config):
        mock_run.return_value = (0, "\n".join(sample_capture), "")

        main_cli(["--config", str(report_config), "snapshot", "--pattern", "orders-service"])

        mock_find.assert_called_once_with("orders-service")
        assert mock_run.call_args.args[0][1] == "4242"

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    def test_snapshot_without_target(self, mock_check, report_config):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "snapshot"])
        assert exc_info.value.code == 1

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command", return_value=(1, "", "Unable to open socket file"))
    def test_capture_failure(self, mock_run, mock_check, report_config):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "snapshot", "--pid", "12345"])
        assert exc_info.value.code == 1

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_watch_with_closed_stdin(
        self, mock_run, mock_check, capture_utils, sample_rows, grown_rows, report_config, monkeypatch
    ):
        mock_run.side_effect = [
            (0, "\n".join(capture_utils.build_capture(sample_rows)), ""),
            (0, "\n".join(capture_utils.build_capture(grown_rows)), ""),
        ]
        with open(os.devnull, encoding="utf-8") as devnull:
            monkeypatch.setattr("sys.stdin", devnull)

            with pytest.raises(SystemExit) as exc_info:
                main_cli(["--config", str(report_config), "watch", "--pid", "4242"])

        assert exc_info.value.code == 1
        assert mock_run.call_count == 1

    @pytest.mark.parametrize("option", [["-f", "re:("], ["--top", "0"]])
    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_bad_report_options_fail_before_capture(self, mock_run, mock_check, option, report_config):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "watch", "--pid", "4242", "--wait", "0", *option])

        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    @patch("heapdiff.cli.main.check_jcmd_installed", return_value=True)
    @patch("heapdiff.snapshot.jcmd.run_command")
    def test_pid_not_running(self, mock_run, mock_check, running_pid, report_config):
        running_pid.return_value = False

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(report_config), "snapshot", "--pid", "4242"])

        assert exc_info.value.code == 1
        running_pid.assert_called_once_with(4242)
        mock_run.assert_not_called()
