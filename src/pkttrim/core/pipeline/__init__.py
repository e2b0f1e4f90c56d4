"""
File-level processing pipeline
"""

from .base_stage import StageBase
from .executor import PipelineExecutor
from .models import ProcessResult, StageStats

__all__ = ["StageBase", "PipelineExecutor", "ProcessResult", "StageStats"]
