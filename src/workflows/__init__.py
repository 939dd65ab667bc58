"""
Workflows module - Pipeline orchestration for briefing generation.
"""
from workflows.base import BriefingPipeline
from workflows.pipeline_factory import create_pipeline

__all__ = [
    "BriefingPipeline",
    "create_pipeline",
]
