"""Phase-based orchestrator for a single file import."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from streamvault.domain.errors import HistoryImportError
from streamvault.domain.model import FileState

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from streamvault.domain.ingest_pipeline.context import PipelineContext
    from streamvault.domain.model import ImportResult


class PipelinePhase(Protocol):
    """Contract implemented by each ingestion phase."""

    name: str
    state: FileState

    def run(self, context: PipelineContext) -> None: ...


@dataclass(slots=True)
class IngestionPipeline:
    """Compose and execute the ordered pipeline phases.

    Each phase moves the file to its own ``FileState`` before running. Any
    ``HistoryImportError`` leaves the file ``FAILED`` and propagates, tagged
    with the file name.
    """

    phases: Sequence[PipelinePhase] = field(default_factory=tuple)

    def with_phase(self, phase: PipelinePhase) -> IngestionPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return IngestionPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[PipelinePhase]) -> IngestionPipeline:
        """Return a new pipeline with the provided ``phases`` concatenated."""

        return IngestionPipeline(phases=(*self.phases, *tuple(phases)))

    def run(self, context: PipelineContext) -> ImportResult:
        """Execute the configured phases in-order against ``context``."""

        try:
            for phase in self.phases:
                context.transition(phase.state)
                phase.run(context)
        except HistoryImportError as exc:
            if exc.file_name is None:
                exc.file_name = context.file_name
            context.transition(FileState.FAILED)
            raise
        context.transition(FileState.DONE)
        return context.result()
