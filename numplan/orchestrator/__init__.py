"""Workflow orchestration for coordinating validation, generation, and export."""

from .service import NumberingPipeline, PipelineResult

__all__ = ["NumberingPipeline", "PipelineResult"]
