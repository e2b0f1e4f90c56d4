from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StageStats(BaseModel):
    """Statistics reported by one stage after processing a file."""

    stage_name: str = Field(..., description="Unique stage name")
    packets_processed: int = Field(0, ge=0, description="Packets read")
    packets_modified: int = Field(0, ge=0, description="Packets that were changed")
    duration_ms: float = Field(0.0, ge=0.0, description="Execution time in milliseconds")
    extra_metrics: Dict[str, Any] = Field(default_factory=dict, description="Stage specific metrics")

    model_config = {"frozen": True}

    @property
    def packets_skipped(self) -> int:
        return self.extra_metrics.get("packets_skipped", 0)

    @property
    def bytes_removed(self) -> int:
        return self.extra_metrics.get("bytes_removed", 0)


class ProcessResult(BaseModel):
    """Complete pipeline execution result, shared by the CLI and tests."""

    success: bool = Field(..., description="Whether the whole run succeeded")
    input_file: str = Field(..., description="Input file path")
    output_file: Optional[str] = Field(None, description="Output file path, None on failure")
    duration_ms: float = Field(0.0, ge=0.0, description="Total execution time in milliseconds")
    stage_stats: List[StageStats] = Field(default_factory=list, description="Per-stage statistics")
    errors: List[str] = Field(default_factory=list, description="Errors captured during the run")

    model_config = {"frozen": True}
