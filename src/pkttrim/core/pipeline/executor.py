from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pkttrim.common.exceptions import PktTrimError, format_error_for_user
from pkttrim.core.pipeline.base_stage import StageBase
from pkttrim.core.pipeline.models import ProcessResult, StageStats
from pkttrim.core.pipeline.stages.trim_payload import PayloadTrimStage
from pkttrim.infrastructure.logging.logger import log_exception

ProgressCallback = Callable[[StageBase, StageStats], None]


class PipelineExecutor:
    """Runs the configured stages over one capture file.

    Config format::

        config = {
            "trim": {
                "enabled": True,
                "error_policy": "abort",
                "rejects_path": None,
            },
        }

    A missing ``trim`` key or ``enabled=False`` leaves the pipeline empty.
    Stages run fail-fast: the first stage error ends the run and is reported
    in :class:`ProcessResult`.
    """

    def __init__(self, config: Optional[Dict] = None):
        self._config: Dict = config or {}
        self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        self.stages: List[StageBase] = self._build_pipeline(self._config)

    def run(
        self,
        input_path: str | Path,
        output_path: str | Path,
        progress_cb: Optional[ProgressCallback] = None,
    ) -> ProcessResult:
        """Execute the pipeline.

        Args:
            input_path: Input PCAP/PCAPNG file.
            output_path: Output file path.
            progress_cb: Optional callback, called as ``cb(stage, stats)``.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        if not input_path.exists():
            error_msg = f"Input file not found: {input_path}"
            self._logger.error(f"Pipeline execution failed: {error_msg}")
            return ProcessResult(
                success=False,
                input_file=str(input_path),
                output_file=None,
                errors=[error_msg],
            )

        if not self.stages:
            return ProcessResult(
                success=False,
                input_file=str(input_path),
                output_file=None,
                errors=["No processing stage is enabled"],
            )

        overall_start = time.time()
        stage_stats_list: List[StageStats] = []
        errors: List[str] = []

        for idx, stage in enumerate(self.stages):
            try:
                stats = stage.process_file(input_path, output_path)
                stage_stats_list.append(stats)
                if progress_cb is not None:
                    progress_cb(stage, stats)

            except PktTrimError as e:
                log_exception(
                    e,
                    logger_name=f"PipelineExecutor.{stage.name}",
                    context={
                        "stage_index": idx,
                        "input_file": str(input_path),
                        "output_file": str(output_path),
                    },
                )
                errors.append(f"Stage {stage.name} execution failed: {format_error_for_user(e)}")
                stage_stats_list.append(
                    StageStats(
                        stage_name=stage.name,
                        extra_metrics={
                            "error": str(e),
                            "error_type": type(e).__name__,
                            "error_details": e.to_dict(),
                            "stage_index": idx,
                        },
                    )
                )
                break

            finally:
                stage.cleanup()

        total_duration_ms = (time.time() - overall_start) * 1000

        return ProcessResult(
            success=len(errors) == 0,
            input_file=str(input_path),
            output_file=str(output_path) if len(errors) == 0 else None,
            duration_ms=total_duration_ms,
            stage_stats=stage_stats_list,
            errors=errors,
        )

    def _build_pipeline(self, config: Dict) -> List[StageBase]:
        stages: List[StageBase] = []

        trim_cfg = config.get("trim", {})
        if trim_cfg.get("enabled", False):
            stage = PayloadTrimStage(trim_cfg)
            if not stage.initialize():
                self._logger.error("Failed to initialize PayloadTrimStage, check the trim configuration")
            stages.append(stage)

        return stages
