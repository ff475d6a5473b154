from __future__ import annotations

from typing import Protocol, Sequence

from fitexplorer.models import ApiStatus, ExerciseRecord, ResultsCount


class RenderSink(Protocol):
    """Where the controller publishes its output. Implementations only display."""

    def render_status(self, status: ApiStatus) -> None: ...

    def render_exercises(self, exercises: Sequence[ExerciseRecord]) -> None: ...

    def render_counts(self, counts: ResultsCount) -> None: ...


class NullSink:
    def render_status(self, status: ApiStatus) -> None:
        pass

    def render_exercises(self, exercises: Sequence[ExerciseRecord]) -> None:
        pass

    def render_counts(self, counts: ResultsCount) -> None:
        pass
