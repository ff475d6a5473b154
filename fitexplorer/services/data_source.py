from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import requests

from fitexplorer.api.exercisedb_client import FetchError, fetch_exercises
from fitexplorer.config import Settings, get_settings
from fitexplorer.models.exercise import ExerciseRecord
from .catalog import load_sample_catalog

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of one load: records on success, the error otherwise."""

    exercises: List[ExerciseRecord] = field(default_factory=list)
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_message(self) -> str:
        if self.error is not None:
            return self.error.status_message
        return f"Connected - {len(self.exercises)} exercises loaded"


class FallbackScheduler(Protocol):
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None: ...


class BlockingScheduler:
    """Waits out the delay on the calling thread, then runs the callback.

    Streamlit reruns the script top to bottom, so the wait sits inside the
    loading spinner rather than on a timer thread.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep) -> None:
        self._sleep = sleep

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        if delay_seconds > 0:
            self._sleep(delay_seconds)
        callback()


class ExerciseDataSource:
    """Remote ExerciseDB collection with the embedded sample set as fallback."""

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or get_settings()
        self.session = session

    @property
    def fallback_delay(self) -> float:
        return max(0.0, float(self.settings.FALLBACK_DELAY_SECONDS))

    def load(self) -> LoadResult:
        try:
            exercises = fetch_exercises(self.settings, session=self.session)
        except FetchError as e:
            logger.error("ExerciseDB load failed (%s): %s", type(e).__name__, e)
            return LoadResult(error=e)
        return LoadResult(exercises=exercises)

    def load_fallback(self) -> List[ExerciseRecord]:
        logger.warning("Loading sample exercise data as ExerciseDB fallback")
        return load_sample_catalog()
