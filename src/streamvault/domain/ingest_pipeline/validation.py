"""Schema validation phase."""

from __future__ import annotations

from typing import TYPE_CHECKING

from streamvault.domain.ingest_pipeline.orchestrator import PipelinePhase
from streamvault.domain.model import FileState

if TYPE_CHECKING:
    from streamvault.domain.ingest_pipeline.context import PipelineContext


class ValidationPhase(PipelinePhase):
    """Parse the file through the configured parser; the whole file fails together."""

    name: str = "validation"
    state: FileState = FileState.VALIDATING

    def run(self, context: PipelineContext) -> None:
        context.entries = list(context.parser(context.file_name, context.upload.content))
