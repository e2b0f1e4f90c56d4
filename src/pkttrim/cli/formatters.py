#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CLI result formatters
"""

import typer

from ..core.messages import MessageFormatter, StandardMessages
from ..core.pipeline.models import ProcessResult, StageStats


def format_result(result: ProcessResult, verbose: bool = False):
    """Display a processing result

    Args:
        result: ProcessResult from pipeline execution
        verbose: Whether to show detailed statistics
    """
    typer.echo(StandardMessages.format_result_summary(result))

    if verbose and result.success:
        for stage_stat in result.stage_stats:
            _format_stage_stats(stage_stat)

    if result.errors:
        typer.echo(f"\n{StandardMessages.ERROR_ICON} Errors:")
        for error in result.errors:
            typer.echo(f"  - {error}")


def _format_stage_stats(stage_stat: StageStats):
    metrics = stage_stat.extra_metrics
    typer.echo(f"\n📋 {stage_stat.stage_name}")
    typer.echo(f"  ⏱️  Duration: {MessageFormatter.format_duration(stage_stat.duration_ms)}")
    typer.echo(f"  📦 Packets processed: {stage_stat.packets_processed:,}")
    typer.echo(f"  ✂️  Packets trimmed: {stage_stat.packets_modified:,}")

    if stage_stat.packets_processed > 0:
        rate = MessageFormatter.format_percentage(stage_stat.packets_modified, stage_stat.packets_processed)
        typer.echo(f"  📊 Trim rate: {rate}")

    if "bytes_removed" in metrics:
        typer.echo(f"  💾 Payload removed: {MessageFormatter.format_file_size(metrics['bytes_removed'])}")

    if metrics.get("packets_skipped"):
        typer.echo(f"  {StandardMessages.WARNING_ICON} Packets skipped: {metrics['packets_skipped']:,}")
        for error_name, count in metrics.get("skipped_by_error", {}).items():
            typer.echo(f"     - {error_name}: {count:,}")


def format_validation(result: ProcessResult):
    """Display the outcome of a dry run"""
    if not result.success:
        format_result(result)
        return

    stats = result.stage_stats[0]
    skipped = stats.packets_skipped
    typer.echo(f"📦 Packets checked: {stats.packets_processed:,}")
    if skipped:
        typer.echo(f"{StandardMessages.WARNING_ICON} {StandardMessages.VALIDATION_FAILED}: {skipped:,}")
        for error_name, count in stats.extra_metrics.get("skipped_by_error", {}).items():
            typer.echo(f"  - {error_name}: {count:,}")
    else:
        typer.echo(f"{StandardMessages.SUCCESS_ICON} {StandardMessages.VALIDATION_PASSED}")
