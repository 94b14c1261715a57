"""
Integration tests for Histogramer: capture, parse and diff around a unit of work.

The JVM captures are replayed with SequenceSnapshotSource and FileSnapshotSource,
so the whole pipeline from capture text to diff report runs without a JVM.
"""

from unittest.mock import patch

import pytest

from heapdiff import (
    FileSnapshotSource,
    Histogramer,
    SequenceSnapshotSource,
    get_diff,
)
from heapdiff.models.entry import HistogramEntry
from heapdiff.validation import CaptureIOError


@pytest.fixture
def before_after(capture_utils, sample_rows, grown_rows):
    return capture_utils.build_capture(sample_rows), capture_utils.build_capture(grown_rows)


@pytest.mark.integration
class TestHistogramerDiff:
    """Test cases for measuring the memory retained by a unit of work."""

    def test_retained_strings_are_reported(self, before_after):
        source = SequenceSnapshotSource(before_after)
        histogramer = Histogramer(source)

        diff = histogramer.get_diff(lambda: ["x" * 8 for _ in range(20000)])

        assert diff.get("String").instances >= 20000
        assert diff.get("java.util.ArrayList").instances >= 1
        assert diff.get("Object[]").size >= 80000
        assert source.remaining == 0

    def test_code_runs_between_captures(self, before_after):
        source = SequenceSnapshotSource(before_after)
        seen = []

        def unit_of_work():
            seen.append(source.remaining)
            return object()

        Histogramer(source).get_diff(unit_of_work)

        assert seen == [1]

    def test_diff_is_sorted_and_excludes_unchanged(self, before_after):
        diff = Histogramer(SequenceSnapshotSource(before_after)).get_diff(lambda: None)

        assert [e.class_name for e in diff] == ["byte[]", "String", "Object[]", "java.util.ArrayList"]
        assert diff.get("int[]") is None

    def test_filter_and_top_on_diff(self, before_after):
        diff = Histogramer(SequenceSnapshotSource(before_after)).get_diff(lambda: None)

        top = diff.filter("java.util.*", "Object[]").get_top(1)

        assert list(top) == [HistogramEntry("Object[]", 1, 80016)]

    def test_own_classes_excluded(self, capture_utils):
        rows_before = [("java.lang.String", 10, 240), ("heapdiff.Histogramer", 1, 32)]
        rows_after = [("java.lang.String", 10, 240), ("heapdiff.Histogramer", 2, 64)]
        source = SequenceSnapshotSource(
            [capture_utils.build_capture(rows_before), capture_utils.build_capture(rows_after)]
        )

        assert len(Histogramer(source).get_diff(lambda: None)) == 0

    def test_custom_exclusions(self, capture_utils):
        rows = [("java.lang.String", 10, 240), ("com.example.Cache", 1, 32)]
        source = SequenceSnapshotSource([capture_utils.build_capture(rows)])

        histogram = Histogramer(source, excluded_packages=["com.example."]).create_histogram()

        assert "com.example.Cache" not in histogram
        assert "String" in histogram

    def test_capture_failure_propagates(self, before_after):
        source = SequenceSnapshotSource(before_after[:1])
        calls = []

        with pytest.raises(CaptureIOError):
            Histogramer(source).get_diff(lambda: calls.append("ran"))

        # The unit of work ran; the second capture failed
        assert calls == ["ran"]

    def test_compare_captures(self, before_after):
        calls = []
        diff = Histogramer(SequenceSnapshotSource(before_after)).compare_captures(
            lambda: calls.append("between")
        )

        assert calls == ["between"]
        assert diff.get_total_memory() == 1200040

    def test_compare_file_captures(self, temp_dir, before_after):
        before, after = before_after
        (temp_dir / "before.txt").write_text("\n".join(before), encoding="utf-8")
        (temp_dir / "after.txt").write_text("\n".join(after), encoding="utf-8")

        reference = Histogramer(FileSnapshotSource(temp_dir / "before.txt")).create_histogram()
        current = Histogramer(FileSnapshotSource(temp_dir / "after.txt")).create_histogram()

        assert current.diff(reference).to_csv().splitlines()[1] == "byte[],20000,640000"


@pytest.mark.integration
class TestModuleLevelGetDiff:
    """Test cases for the one-off get_diff helper."""

    def test_with_explicit_source(self, before_after):
        diff = get_diff(lambda: None, source=SequenceSnapshotSource(before_after))
        assert diff.get("String") == HistogramEntry("String", 20000, 480000)

    def test_source_from_configuration(self, before_after, config_file):
        from heapdiff.config import set_config_path

        set_config_path(config_file('[capture]\ntarget_pattern = "orders-service"\n'))
        outputs = iter([(0, "\n".join(before_after[0]), ""), (0, "\n".join(before_after[1]), "")])

        with (
            patch("heapdiff.snapshot.factory.find_jvm_pid", return_value=4242) as mock_find,
            patch("heapdiff.snapshot.jcmd.run_command", side_effect=lambda *a, **k: next(outputs)),
        ):
            diff = get_diff(lambda: None)

        mock_find.assert_called_once_with("orders-service")
        assert diff.get("Object[]").size == 80016
