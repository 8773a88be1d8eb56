"""Application layer: pipeline orchestration, request/response models, ports."""

from .models import PipelineRequest, PipelineResponse, PipelineSummary, StageResult
from .pipeline_use_case import PipelineDependencies, PipelineUseCase

__all__ = [
    "PipelineDependencies",
    "PipelineRequest",
    "PipelineResponse",
    "PipelineSummary",
    "PipelineUseCase",
    "StageResult",
]
