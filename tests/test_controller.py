from __future__ import annotations

from fitexplorer.models import ConnectionState, FilterCriteria
from fitexplorer.pipeline import ExplorerController
from fitexplorer.services.catalog import SAMPLE_EXERCISES
from fitexplorer.services.data_source import BlockingScheduler, ExerciseDataSource
from fitexplorer.services.filtering import filter_exercises
from fitexplorer.services.sorting import sort_exercises

from conftest import FakeResponse, FakeSession, ManualScheduler, RecordingSink, make_exercise


def build(settings, response: FakeResponse):
    sink = RecordingSink()
    scheduler = ManualScheduler()
    source = ExerciseDataSource(settings, session=FakeSession(response))
    return ExplorerController(source=source, sink=sink, scheduler=scheduler), sink, scheduler


def test_live_load_publishes_sorted_records(settings) -> None:
    api = list(reversed(SAMPLE_EXERCISES))
    ctrl, sink, scheduler = build(settings, FakeResponse(200, api))
    ctrl.load()

    assert ctrl.connection == ConnectionState.CONNECTED_LIVE
    assert scheduler.pending == []
    assert [ex.id for ex in ctrl.all_records] == [item["id"] for item in api]
    assert [ex.name for ex in ctrl.visible_records][:3] == ["3/4 sit-up", "45° side bend", "air bike"]
    assert [s.message for s in sink.statuses] == ["Connecting to ExerciseDB API...", "Connected - 5 exercises loaded"]
    assert sink.renders[-1] == ctrl.visible_records
    assert sink.counts[-1].as_tuple() == (5, 5)
    assert ctrl.display_state == "results"
    assert ctrl.facets.body_parts == ["chest", "upper arms", "waist"]
    assert ctrl.facets.equipment == ["barbell", "body weight", "dumbbell"]
    assert ctrl.facets.targets == ["abs", "biceps", "pectorals"]


def test_rate_limit_falls_back_to_samples_after_delay(settings) -> None:
    ctrl, sink, scheduler = build(settings, FakeResponse(429, {"message": "Too many requests"}))
    ctrl.load()

    assert ctrl.all_records == []
    assert ctrl.display_state == "error"
    assert ctrl.state.status.message == "Rate Limit Exceeded"
    assert ctrl.connection == ConnectionState.NOT_CONNECTED
    assert [delay for delay, _ in scheduler.pending] == [2.0]

    scheduler.run_all()
    assert ctrl.connection == ConnectionState.CONNECTED_FALLBACK
    assert [ex.id for ex in ctrl.all_records] == [f"sample_000{i}" for i in range(1, 6)]
    assert ctrl.state.status.message == "Using Sample Data (API Offline)"
    assert ctrl.state.status.kind == "error"
    assert ctrl.display_state == "results"


def test_invalid_payload_also_falls_back(settings) -> None:
    ctrl, sink, scheduler = build(settings, FakeResponse(200, {}))
    ctrl.load()
    assert ctrl.state.status.message == "Invalid API Response"
    scheduler.run_all()
    assert ctrl.connection == ConnectionState.CONNECTED_FALLBACK
    assert len(ctrl.all_records) == 5


def test_newer_load_supersedes_pending_fallback(settings) -> None:
    ctrl, sink, scheduler = build(settings, FakeResponse(503))
    ctrl.load()
    stale = list(scheduler.pending)
    scheduler.pending.clear()

    ctrl.source.session = FakeSession(FakeResponse(200, SAMPLE_EXERCISES[:2]))
    ctrl.load()
    for _, cb in stale:
        cb()
    assert ctrl.connection == ConnectionState.CONNECTED_LIVE
    assert len(ctrl.all_records) == 2


def test_blocking_scheduler_waits_then_runs(settings) -> None:
    slept: list[float] = []
    source = ExerciseDataSource(settings, session=FakeSession(FakeResponse(401)))
    ctrl = ExplorerController(source=source, scheduler=BlockingScheduler(sleep=slept.append))
    ctrl.load()
    assert slept == [2.0]
    assert ctrl.connection == ConnectionState.CONNECTED_FALLBACK


def test_no_matches_state_keeps_total(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    ctrl.on_criteria_changed(FilterCriteria(equipment="barbell", body_part="waist"))

    counts = ctrl.results_count()
    assert ctrl.visible_records == []
    assert counts.as_tuple() == (0, 5)
    assert counts.no_matches
    assert counts.message == "No exercises match your search criteria"
    assert ctrl.display_state == "no_matches"
    assert len(ctrl.all_records) == 5


def test_count_messages(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    assert ctrl.results_count().message == "Showing all 5 exercises from ExerciseDB"
    ctrl.on_criteria_changed(FilterCriteria(body_part="waist"))
    assert ctrl.results_count().message == "Showing 3 of 5 exercises from ExerciseDB"


def test_criteria_change_keeps_sort_key(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    ctrl.on_sort_key_changed("target")
    ctrl.on_criteria_changed(FilterCriteria(search_text="b"))
    assert ctrl.state.sort_key == "target"
    expected = sort_exercises(filter_exercises(samples, FilterCriteria(search_text="b")), "target")
    assert ctrl.visible_records == expected


def test_sort_change_ties_follow_collection_order() -> None:
    recs = [
        make_exercise("a", "b-name", target="same"),
        make_exercise("b", "a-name", target="same"),
    ]
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(recs)
    assert [ex.id for ex in ctrl.visible_records] == ["b", "a"]
    ctrl.on_sort_key_changed("target")
    assert [ex.id for ex in ctrl.visible_records] == ["a", "b"]


def test_result_depends_only_on_collection_criteria_and_key(samples) -> None:
    c = FilterCriteria(search_text="a")
    first = ExplorerController(scheduler=ManualScheduler())
    first.on_load_complete(samples)
    first.on_sort_key_changed("equipment")
    first.on_criteria_changed(FilterCriteria(body_part="chest"))
    first.on_criteria_changed(c)

    second = ExplorerController(scheduler=ManualScheduler())
    second.on_load_complete(samples)
    second.on_criteria_changed(c)
    second.on_sort_key_changed("equipment")

    assert first.visible_records == second.visible_records
    assert all(any(ex is s for s in samples) for ex in first.visible_records)


def test_load_complete_resets_criteria_and_key(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    ctrl.on_criteria_changed(FilterCriteria(body_part="waist"))
    ctrl.on_sort_key_changed("target")
    ctrl.on_load_complete(samples)
    assert ctrl.state.criteria.is_empty
    assert ctrl.state.sort_key == "name"
    assert len(ctrl.visible_records) == 5


def test_facets_keep_values_from_earlier_collections(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete([make_exercise("x", "lunge", body_part="upper legs", equipment="kettlebell", target="glutes")])
    ctrl.on_load_complete(samples)
    assert "upper legs" in ctrl.facets.body_parts
    assert "kettlebell" in ctrl.facets.equipment
    assert len(ctrl.all_records) == 5


def test_apply_only_recomputes_on_change(samples) -> None:
    sink = RecordingSink()
    ctrl = ExplorerController(sink=sink, scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    renders = len(sink.renders)
    assert ctrl.apply(FilterCriteria(), "name") is False
    assert len(sink.renders) == renders
    assert ctrl.apply(FilterCriteria(search_text="bench"), "name") is True
    assert [ex.id for ex in ctrl.visible_records] == ["sample_0004"]
    assert ctrl.get_exercise("sample_0005").name == "dumbbell bicep curl"
    assert ctrl.get_exercise("missing") is None


def test_idle_before_any_load() -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    assert ctrl.display_state == "idle"
    assert ctrl.results_count().as_tuple() == (0, 0)
    assert not ctrl.results_count().no_matches


def test_delivered_collection_shows_results_without_status(samples) -> None:
    ctrl = ExplorerController(scheduler=ManualScheduler())
    ctrl.on_load_complete(samples)
    assert ctrl.state.status is None
    assert ctrl.display_state == "results"
