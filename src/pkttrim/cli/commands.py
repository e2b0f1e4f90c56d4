#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CLI commands

``trim`` runs the payload trimming pipeline, ``validate`` performs a dry run
reporting packets that cannot be trimmed, ``config`` prints the effective
configuration.
"""

import copy
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml

from ..common.constants import FileConstants
from ..common.enums import ErrorPolicy, LogLevel
from ..config import AppConfig, get_app_config, reload_app_config
from ..core.messages import StandardMessages
from ..core.pipeline.executor import PipelineExecutor
from ..infrastructure.logging import reconfigure_logging, set_log_level
from .formatters import format_result, format_validation


def _load_config(config_path: Optional[Path]) -> AppConfig:
    """Return a private copy; command line overrides must not leak into the shared config"""
    if config_path is not None:
        if not config_path.exists():
            typer.echo(f"{StandardMessages.ERROR_ICON} Config file not found: {config_path}", err=True)
            raise typer.Exit(1)
        config = reload_app_config(config_path)
        reconfigure_logging()
        return copy.deepcopy(config)
    return copy.deepcopy(get_app_config())


def _validate_input_path(input_path: Path) -> None:
    if not input_path.exists():
        typer.echo(f"{StandardMessages.ERROR_ICON} {StandardMessages.INPUT_NOT_FOUND}: {input_path}", err=True)
        raise typer.Exit(1)
    if not input_path.is_file() or input_path.suffix.lower() not in FileConstants.SUPPORTED_EXTENSIONS:
        typer.echo(
            f"{StandardMessages.ERROR_ICON} {StandardMessages.INVALID_FILE_TYPE} (got: {input_path})",
            err=True,
        )
        raise typer.Exit(1)


def _check_config(config: AppConfig) -> None:
    is_valid, errors = config.validate()
    if not is_valid:
        typer.echo(f"{StandardMessages.ERROR_ICON} {StandardMessages.CONFIGURATION_ERROR}:", err=True)
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)


def _echo_progress(stage, stats) -> None:
    typer.echo(
        StandardMessages.format_stage_progress(stage.get_display_name(), stats.packets_processed, stats.packets_modified)
    )


def generate_output_path(input_path: Path, suffix: str = FileConstants.OUTPUT_SUFFIX) -> Path:
    """``capture.pcapng`` -> ``capture_trimmed.pcap``; output is always classic pcap"""
    return input_path.parent / f"{input_path.stem}{suffix}.pcap"


def build_pipeline_config(config: AppConfig, dry_run: bool = False) -> Dict[str, Any]:
    trim_config = config.get_trim_config()
    trim_config.update({"enabled": True, "dry_run": dry_run})
    return {"trim": trim_config}


def trim_command(
    input_path: Path = typer.Argument(..., help="Input PCAP/PCAPNG file"),
    output_path: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output file (default: <input>_trimmed.pcap)"
    ),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Drop packets that cannot be trimmed instead of stopping"
    ),
    rejects: Optional[Path] = typer.Option(
        None, "--rejects", help="Write dropped packets, untouched, to this capture (needs --skip-errors)"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every layer seen and show statistics"),
):
    """Strip application payload from a capture, keeping headers and original lengths"""
    _validate_input_path(input_path)
    config = _load_config(config_path)

    if skip_errors:
        config.trim.error_policy = ErrorPolicy.SKIP.value
    if rejects is not None:
        config.trim.rejects_path = str(rejects)
    if verbose:
        config.logging.trace_layers = True
        set_log_level(LogLevel.DEBUG)

    _check_config(config)

    if output_path is None:
        output_path = generate_output_path(input_path, config.trim.output_suffix)
        if verbose:
            typer.echo(f"📁 Auto-generated output: {output_path}")

    if output_path.resolve() == input_path.resolve():
        typer.echo(f"{StandardMessages.ERROR_ICON} Output must differ from input: {output_path}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{StandardMessages.START_ICON} {StandardMessages.PROCESSING_START}")
    executor = PipelineExecutor(build_pipeline_config(config))
    result = executor.run(input_path, output_path, progress_cb=_echo_progress if verbose else None)
    format_result(result, verbose)

    if not result.success:
        typer.echo(f"{StandardMessages.ERROR_ICON} {StandardMessages.PROCESSING_FAILED}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{StandardMessages.SUCCESS_ICON} {StandardMessages.PROCESSING_COMPLETE}: {output_path}")


def validate_command(
    input_path: Path = typer.Argument(..., help="Input PCAP/PCAPNG file"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)"),
):
    """Check that every packet of a capture can be trimmed, without writing output"""
    _validate_input_path(input_path)
    config = _load_config(config_path)
    config.trim.error_policy = ErrorPolicy.SKIP.value
    config.trim.rejects_path = None
    _check_config(config)

    typer.echo(f"{StandardMessages.START_ICON} {StandardMessages.VALIDATION_START}")
    executor = PipelineExecutor(build_pipeline_config(config, dry_run=True))
    result = executor.run(input_path, generate_output_path(input_path))
    format_validation(result)

    if not result.success or result.stage_stats[0].packets_skipped:
        raise typer.Exit(1)


def config_command(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)"),
):
    """Display the effective configuration"""
    config = _load_config(config_path)
    source = config_path or AppConfig.get_default_config_path()
    typer.echo(f"# source: {source}")
    data = asdict(config)
    data.pop("created_at", None)
    data.pop("updated_at", None)
    typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip())

    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            typer.echo(f"{StandardMessages.WARNING_ICON} {error}", err=True)
        raise typer.Exit(1)
