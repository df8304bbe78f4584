"""Message processing pipeline."""

from .orchestrator import IPipeline, Pipeline, PipelineStage

__all__ = ["IPipeline", "Pipeline", "PipelineStage"]
