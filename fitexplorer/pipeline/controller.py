from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence

from fitexplorer.api.exercisedb_client import FetchError
from fitexplorer.models import (
    DEFAULT_SORT_KEY,
    EMPTY_CRITERIA,
    ApiStatus,
    ConnectionState,
    ExerciseRecord,
    Facets,
    FilterCriteria,
    ResultsCount,
    SortKey,
    StatusKind,
)
from fitexplorer.services.catalog import get_by_id, merge_facets
from fitexplorer.services.data_source import BlockingScheduler, ExerciseDataSource, FallbackScheduler
from fitexplorer.services.filtering import filter_exercises
from fitexplorer.services.sorting import normalize_sort_key, sort_exercises
from .sink import NullSink, RenderSink

logger = logging.getLogger(__name__)

DisplayState = Literal["idle", "loading", "error", "results", "no_matches"]

CONNECTING_MESSAGE = "Connecting to ExerciseDB API..."
FALLBACK_MESSAGE = "Using Sample Data (API Offline)"


@dataclass
class ExplorerState:
    all_records: List[ExerciseRecord] = field(default_factory=list)
    visible_records: List[ExerciseRecord] = field(default_factory=list)
    criteria: FilterCriteria = EMPTY_CRITERIA
    sort_key: SortKey = DEFAULT_SORT_KEY
    facets: Facets = field(default_factory=Facets)
    connection: ConnectionState = ConnectionState.NOT_CONNECTED
    status: Optional[ApiStatus] = None
    loading: bool = False
    last_error: Optional[FetchError] = None
    fallback_pending: bool = False
    # Bumped by every load; a pending fallback from an older load is dropped
    generation: int = 0


class ExplorerController:
    """Owns the collection and runs DataSource -> filter -> sort -> sink.

    One controller per independent view; nothing here is shared between
    instances.
    """

    def __init__(
        self,
        source: ExerciseDataSource | None = None,
        sink: RenderSink | None = None,
        scheduler: FallbackScheduler | None = None,
    ) -> None:
        self.source = source or ExerciseDataSource()
        self.sink: RenderSink = sink or NullSink()
        self.scheduler: FallbackScheduler = scheduler or BlockingScheduler()
        self.state = ExplorerState()

    # ----- loading -----

    def load(self) -> None:
        self.state.generation += 1
        generation = self.state.generation
        self.state.loading = True
        self.state.last_error = None
        self._set_status(CONNECTING_MESSAGE, "loading")

        result = self.source.load()
        if result.ok:
            self.state.connection = ConnectionState.CONNECTED_LIVE
            self._set_status(result.status_message, "success")
            self.on_load_complete(result.exercises)
            return

        self.state.loading = False
        self.state.last_error = result.error
        self._set_status(result.status_message, "error")
        self.state.fallback_pending = True
        logger.warning("ExerciseDB failed, sample data in %.1fs", self.source.fallback_delay)
        self.scheduler.schedule(self.source.fallback_delay, lambda: self._load_fallback(generation))

    def _load_fallback(self, generation: int) -> None:
        if generation != self.state.generation:
            logger.info("Dropping fallback from superseded load %d", generation)
            return
        self.state.fallback_pending = False
        exercises = self.source.load_fallback()
        self.state.connection = ConnectionState.CONNECTED_FALLBACK
        self._set_status(FALLBACK_MESSAGE, "error")
        self.on_load_complete(exercises)
        logger.info("Sample data loaded as ExerciseDB fallback")

    # ----- events -----

    def on_load_complete(self, exercises: Sequence[ExerciseRecord]) -> None:
        self.state.all_records = list(exercises)
        self.state.facets = merge_facets(self.state.facets, self.state.all_records)
        self.state.criteria = EMPTY_CRITERIA
        self.state.sort_key = DEFAULT_SORT_KEY
        self.state.loading = False
        logger.info(
            "Loaded %d exercises (%d body parts, %d equipment, %d targets)",
            len(self.state.all_records),
            len(self.state.facets.body_parts),
            len(self.state.facets.equipment),
            len(self.state.facets.targets),
        )
        self._recompute()

    def on_criteria_changed(self, criteria: FilterCriteria) -> None:
        self.state.criteria = criteria
        self._recompute()

    def on_sort_key_changed(self, key: str) -> None:
        self.state.sort_key = normalize_sort_key(key)
        # Recomputing from all_records keeps ties in collection order
        self._recompute()

    def apply(self, criteria: FilterCriteria, key: str) -> bool:
        """Feed the current widget values; only recompute what changed. Returns True if anything did."""
        changed = False
        if criteria != self.state.criteria:
            self.on_criteria_changed(criteria)
            changed = True
        if normalize_sort_key(key) != self.state.sort_key:
            self.on_sort_key_changed(key)
            changed = True
        return changed

    # ----- queries -----

    @property
    def all_records(self) -> List[ExerciseRecord]:
        return self.state.all_records

    @property
    def visible_records(self) -> List[ExerciseRecord]:
        return self.state.visible_records

    @property
    def facets(self) -> Facets:
        return self.state.facets

    @property
    def connection(self) -> ConnectionState:
        return self.state.connection

    def results_count(self) -> ResultsCount:
        return ResultsCount(visible=len(self.state.visible_records), total=len(self.state.all_records))

    @property
    def display_state(self) -> DisplayState:
        if self.state.loading:
            return "loading"
        if self.state.fallback_pending:
            return "error"
        if self.state.status is None and not self.state.all_records:
            return "idle"
        if self.results_count().no_matches:
            return "no_matches"
        return "results"

    def get_exercise(self, exercise_id: str) -> ExerciseRecord | None:
        return get_by_id(self.state.all_records, exercise_id)

    def publish(self) -> None:
        """Push the current state to the sink again."""
        if self.state.status is not None:
            self.sink.render_status(self.state.status)
        self.sink.render_exercises(list(self.state.visible_records))
        self.sink.render_counts(self.results_count())

    # ----- internals -----

    def _recompute(self) -> None:
        matched = filter_exercises(self.state.all_records, self.state.criteria)
        self.state.visible_records = sort_exercises(matched, self.state.sort_key)
        self.sink.render_exercises(list(self.state.visible_records))
        self.sink.render_counts(self.results_count())

    def _set_status(self, message: str, kind: StatusKind) -> None:
        self.state.status = ApiStatus(message=message, kind=kind)
        self.sink.render_status(self.state.status)
