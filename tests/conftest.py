from __future__ import annotations

import json
from typing import Any, Callable, List, Sequence

import pytest

from fitexplorer.config import Settings
from fitexplorer.models import ApiStatus, ExerciseRecord, ResultsCount
from fitexplorer.services.catalog import load_sample_catalog


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: List[dict] = []

    def get(self, url: str, headers: dict | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


class RecordingSink:
    def __init__(self) -> None:
        self.statuses: List[ApiStatus] = []
        self.renders: List[List[ExerciseRecord]] = []
        self.counts: List[ResultsCount] = []

    def render_status(self, status: ApiStatus) -> None:
        self.statuses.append(status)

    def render_exercises(self, exercises: Sequence[ExerciseRecord]) -> None:
        self.renders.append(list(exercises))

    def render_counts(self, counts: ResultsCount) -> None:
        self.counts.append(counts)


class ManualScheduler:
    """Holds the fallback continuation until the test fires it."""

    def __init__(self) -> None:
        self.pending: List[tuple[float, Callable[[], None]]] = []

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay_seconds, callback))

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, cb in pending:
            cb()


def make_exercise(id: str, name: str, body_part: str = "waist", equipment: str = "body weight",
                  target: str = "abs", **extra: Any) -> ExerciseRecord:
    return ExerciseRecord.model_validate(
        {"id": id, "name": name, "bodyPart": body_part, "equipment": equipment, "target": target, **extra}
    )


@pytest.fixture
def samples() -> List[ExerciseRecord]:
    return load_sample_catalog()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        EXERCISEDB_API_KEY="test-key",
        EXERCISEDB_API_HOST="exercisedb.p.rapidapi.com",
        EXERCISEDB_ENDPOINT="https://exercisedb.p.rapidapi.com/exercises?limit=0",
        FALLBACK_DELAY_SECONDS=2.0,
    )
