#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Standard messages shared by the CLI commands and formatters
"""

from .pipeline.models import ProcessResult


class StandardMessages:
    """User-facing message catalogue"""

    INPUT_NOT_FOUND = "Input path does not exist"
    INVALID_FILE_TYPE = "Input file must be a PCAP or PCAPNG file"
    CONFIGURATION_ERROR = "Configuration validation failed"

    PROCESSING_START = "Trimming started..."
    PROCESSING_COMPLETE = "Trimming completed successfully"
    PROCESSING_FAILED = "Trimming failed"
    VALIDATION_START = "Checking packets..."
    VALIDATION_PASSED = "Every packet can be trimmed"
    VALIDATION_FAILED = "Some packets cannot be trimmed"

    SUCCESS_ICON = "✅"
    ERROR_ICON = "❌"
    WARNING_ICON = "⚠️"
    START_ICON = "🚀"
    PROCESSING_ICON = "⚙️"

    @staticmethod
    def format_result_summary(result: ProcessResult) -> str:
        if result.success:
            duration = result.duration_ms / 1000
            stages = len(result.stage_stats)
            return f"{StandardMessages.SUCCESS_ICON} Processed {stages} stage(s) in {duration:.2f}s"
        errors = "; ".join(result.errors)
        return f"{StandardMessages.ERROR_ICON} Processing failed: {errors}"

    @staticmethod
    def format_stage_progress(stage_name: str, packets_processed: int, packets_modified: int) -> str:
        return f"{StandardMessages.PROCESSING_ICON} [{stage_name}] {packets_processed:,} packets, {packets_modified:,} trimmed"


class MessageFormatter:
    """Number formatting helpers"""

    @staticmethod
    def format_duration(duration_ms: float) -> str:
        if duration_ms < 1000:
            return f"{duration_ms:.0f}ms"
        return f"{duration_ms / 1000:.2f}s"

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        size = float(size_bytes)
        for unit in ("B", "KB", "MB", "GB"):
            if abs(size) < 1024 or unit == "GB":
                return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} GB"

    @staticmethod
    def format_percentage(part: int, total: int) -> str:
        if total <= 0:
            return "0.0%"
        return f"{part / total * 100:.1f}%"
