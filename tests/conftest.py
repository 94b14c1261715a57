"""
Pytest configuration and shared fixtures for the heapdiff test suite.

This module provides common fixtures, capture builders and configuration
for all test modules in the heapdiff project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Capture Builders
# ============================================================================

# (raw class name, instances, bytes)
Row = Tuple[str, int, int]

CAPTURE_HEADER = " num     #instances         #bytes  class name (module)"
CAPTURE_SEPARATOR = "-" * 55


class CaptureUtils:
    """Build text in the layout printed by `jcmd <pid> GC.class_histogram`."""

    @staticmethod
    def format_row(num: int, instances: int, size: int, class_name: str) -> str:
        return f"{num:>5}: {instances:>13} {size:>13}  {class_name}"

    @staticmethod
    def format_totals(instances: int, size: int) -> str:
        return f"Total {instances:>13} {size:>13}"

    @staticmethod
    def build_capture(rows: Sequence[Row], pid: int = 12345) -> List[str]:
        """Build the lines of a capture, totals row included."""
        lines = [f"{pid}:", CAPTURE_HEADER, CAPTURE_SEPARATOR]
        for num, (name, instances, size) in enumerate(rows, start=1):
            lines.append(CaptureUtils.format_row(num, instances, size, name))
        lines.append(
            CaptureUtils.format_totals(
                sum(row[1] for row in rows), sum(row[2] for row in rows)
            )
        )
        return lines


@pytest.fixture
def capture_utils():
    """Provide capture building functions."""
    return CaptureUtils


@pytest.fixture
def sample_rows() -> List[Row]:
    """Rows of a small JDK 17 capture, largest first as jcmd prints them."""
    return [
        ("[B (java.base@17.0.8)", 60452, 4351184),
        ("java.lang.String (java.base@17.0.8)", 58211, 1397064),
        ("[Ljava.lang.Object; (java.base@17.0.8)", 9000, 720000),
        ("java.util.HashMap$Node (java.base@17.0.8)", 15000, 480000),
        ("[I (java.base@17.0.8)", 3000, 240000),
        ("java.util.ArrayList (java.base@17.0.8)", 5000, 120000),
        ("java.lang.reflect.Method (java.base@17.0.8)", 1200, 105600),
        ("heapdiff.Marker", 1, 16),
        ("[[I (java.base@17.0.8)", 10, 640),
    ]


@pytest.fixture
def sample_capture(sample_rows) -> List[str]:
    """A complete capture built from `sample_rows`."""
    return CaptureUtils.build_capture(sample_rows)


@pytest.fixture
def sample_capture_file(temp_dir, sample_capture) -> Path:
    """`sample_capture` saved to disk as `jcmd ... > before.txt` would."""
    path = temp_dir / "before.txt"
    path.write_text("\n".join(sample_capture) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def grown_rows(sample_rows) -> List[Row]:
    """
    `sample_rows` after a unit of work that keeps 20000 strings in one ArrayList.

    The list's backing array accounts for the Object[] growth.
    """
    grown = {
        "java.lang.String (java.base@17.0.8)": (20000, 480000),
        "[B (java.base@17.0.8)": (20000, 640000),
        "java.util.ArrayList (java.base@17.0.8)": (1, 24),
        "[Ljava.lang.Object; (java.base@17.0.8)": (1, 80016),
    }
    rows = []
    for name, instances, size in sample_rows:
        extra_instances, extra_size = grown.get(name, (0, 0))
        rows.append((name, instances + extra_instances, size + extra_size))
    return rows


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_file(temp_dir):
    """Write a config.toml and return a function adding content to it."""

    def _write(content: str) -> Path:
        path = temp_dir / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically reset configuration after each test."""
    yield  # Run the test

    from heapdiff.config import clear_config_cache, set_config_path
    from heapdiff.config.manager import _DEFAULT_CONFIG_FILE_PATH

    set_config_path(_DEFAULT_CONFIG_FILE_PATH)
    clear_config_cache()
