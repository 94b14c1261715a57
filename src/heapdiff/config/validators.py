"""
Configuration validation utilities.

Turns the raw `[capture]`, `[parser]` and `[report]` tables of config.toml
into validated configuration dataclasses.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import (
    COMPRESSIONS,
    STORAGE_FORMATS,
    AppConfig,
    CaptureConfig,
    ParserConfig,
    ReportConfig,
    StorageConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_regex_pattern,
    validate_string_list,
)

logger = logging.getLogger(__name__)


def _validate_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean", field_name=field_name, value=value)
    return value


def _validate_table(value: Any, field_name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be a table", field_name=field_name, value=value)
    return value


def validate_capture_config(capture_data: Dict[str, Any]) -> CaptureConfig:
    """
    Validate and create a CaptureConfig from the raw `[capture]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = CaptureConfig()

    jcmd_path = capture_data.get("jcmd_path", defaults.jcmd_path)
    if not isinstance(jcmd_path, str) or not jcmd_path.strip():
        raise ValidationError(
            "capture.jcmd_path must be a non-empty string",
            field_name="capture.jcmd_path",
            value=jcmd_path,
        )

    live_only = _validate_bool(capture_data.get("live_only", defaults.live_only), "capture.live_only")

    timeout_seconds = validate_positive_float(
        capture_data.get("timeout_seconds", defaults.timeout_seconds),
        min_value=1.0,
        max_value=3600.0,
        field_name="capture.timeout_seconds",
    )

    target_pattern = capture_data.get("target_pattern", defaults.target_pattern)
    if target_pattern:
        validate_regex_pattern(target_pattern, field_name="capture.target_pattern")
    elif not isinstance(target_pattern, str):
        raise ValidationError(
            "capture.target_pattern must be a string",
            field_name="capture.target_pattern",
            value=target_pattern,
        )

    return CaptureConfig(
        jcmd_path=jcmd_path,
        live_only=live_only,
        timeout_seconds=timeout_seconds,
        target_pattern=target_pattern,
    )


def validate_parser_config(parser_data: Dict[str, Any]) -> ParserConfig:
    """
    Validate and create a ParserConfig from the raw `[parser]` table.

    Raises:
        ValidationError: If validation fails
    """
    excluded = parser_data.get("excluded_packages", ParserConfig().excluded_packages)
    return ParserConfig(
        excluded_packages=validate_string_list(excluded, field_name="parser.excluded_packages")
    )


def validate_report_config(report_data: Dict[str, Any]) -> ReportConfig:
    """
    Validate and create a ReportConfig from the raw `[report]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ReportConfig()

    top_n = validate_positive_integer(
        report_data.get("top_n", defaults.top_n),
        min_value=1,
        max_value=100000,
        field_name="report.top_n",
    )

    output_dir = report_data.get("output_dir", str(defaults.output_dir))
    if not isinstance(output_dir, str) or not output_dir.strip():
        raise ValidationError(
            "report.output_dir must be a non-empty string",
            field_name="report.output_dir",
            value=output_dir,
        )

    skip_plots = _validate_bool(report_data.get("skip_plots", defaults.skip_plots), "report.skip_plots")

    storage_data = _validate_table(report_data.get("storage", {}), "report.storage")
    validate_enum_choice(
        storage_data.get("format", "csv"),
        choices=list(STORAGE_FORMATS),
        field_name="report.storage.format",
    )
    validate_enum_choice(
        storage_data.get("compression", "snappy"),
        choices=list(COMPRESSIONS),
        field_name="report.storage.compression",
    )

    return ReportConfig(
        top_n=top_n,
        output_dir=Path(output_dir).expanduser(),
        skip_plots=skip_plots,
        storage=StorageConfig.from_dict(storage_data),
    )


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole parsed config.toml.

    Missing tables and keys fall back to their defaults.

    Raises:
        ValidationError: If any value is invalid
    """
    app_config = AppConfig(
        capture=validate_capture_config(_validate_table(config_data.get("capture", {}), "capture")),
        parser=validate_parser_config(_validate_table(config_data.get("parser", {}), "parser")),
        report=validate_report_config(_validate_table(config_data.get("report", {}), "report")),
    )
    logger.debug(f"Validated configuration: {app_config}")
    return app_config
