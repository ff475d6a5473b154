from __future__ import annotations

import base64
from functools import lru_cache
from typing import Any, Dict, List, Sequence

from fitexplorer.models.exercise import ExerciseRecord
from fitexplorer.models.status import Facets

_DEMO_SVG = (
    "<svg width=\"300\" height=\"200\" xmlns=\"http://www.w3.org/2000/svg\">"
    "<defs><linearGradient id=\"g\" x1=\"0%\" y1=\"0%\" x2=\"100%\" y2=\"100%\">"
    "<stop offset=\"0%\" stop-color=\"{start}\"/><stop offset=\"100%\" stop-color=\"{end}\"/>"
    "</linearGradient></defs>"
    "<rect width=\"100%\" height=\"100%\" fill=\"url(#g)\"/>"
    "<text x=\"50%\" y=\"50%\" font-size=\"18\" fill=\"#ffffff\" text-anchor=\"middle\" dy=\".3em\">{label}</text>"
    "</svg>"
)


def demo_image(label: str, start: str = "#e5e7eb", end: str = "#9ca3af") -> str:
    """Inline SVG placeholder as a data URI; needs no network."""
    svg = _DEMO_SVG.format(label=label, start=start, end=end)
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


# Offline demonstration set, shaped like real ExerciseDB records
SAMPLE_EXERCISES: List[Dict[str, Any]] = [
    {
        "id": "sample_0001",
        "name": "3/4 sit-up",
        "target": "abs",
        "bodyPart": "waist",
        "equipment": "body weight",
        "gifUrl": demo_image("3/4 Sit-up", "#667eea", "#764ba2"),
    },
    {
        "id": "sample_0002",
        "name": "45° side bend",
        "target": "abs",
        "bodyPart": "waist",
        "equipment": "body weight",
        "gifUrl": demo_image("45° Side Bend", "#f093fb", "#f5576c"),
    },
    {
        "id": "sample_0003",
        "name": "air bike",
        "target": "abs",
        "bodyPart": "waist",
        "equipment": "body weight",
        "gifUrl": demo_image("Air Bike", "#4facfe", "#00f2fe"),
    },
    {
        "id": "sample_0004",
        "name": "barbell bench press",
        "target": "pectorals",
        "bodyPart": "chest",
        "equipment": "barbell",
        "gifUrl": demo_image("Barbell Bench Press", "#43e97b", "#38f9d7"),
    },
    {
        "id": "sample_0005",
        "name": "dumbbell bicep curl",
        "target": "biceps",
        "bodyPart": "upper arms",
        "equipment": "dumbbell",
        "gifUrl": demo_image("Dumbbell Bicep Curl", "#fa709a", "#fee140"),
    },
]


@lru_cache(maxsize=1)
def _sample_catalog() -> tuple[ExerciseRecord, ...]:
    return tuple(ExerciseRecord.model_validate(item) for item in SAMPLE_EXERCISES)


def load_sample_catalog() -> List[ExerciseRecord]:
    return list(_sample_catalog())


def derive_facets(exercises: Sequence[ExerciseRecord]) -> Facets:
    body_parts: set[str] = set()
    equipment: set[str] = set()
    targets: set[str] = set()
    for ex in exercises:
        if ex.bodyPart:
            body_parts.add(ex.bodyPart)
        if ex.equipment:
            equipment.add(ex.equipment)
        if ex.target:
            targets.add(ex.target)
    return Facets(body_parts=sorted(body_parts), equipment=sorted(equipment), targets=sorted(targets))


def get_by_id(exercises: Sequence[ExerciseRecord], exercise_id: str) -> ExerciseRecord | None:
    for ex in exercises:
        if ex.id == exercise_id:
            return ex
    return None


def merge_facets(current: Facets, exercises: Sequence[ExerciseRecord]) -> Facets:
    """Add the values of ``exercises`` to ``current``. Values are never removed."""
    fresh = derive_facets(exercises)
    return Facets(
        body_parts=sorted(set(current.body_parts) | set(fresh.body_parts)),
        equipment=sorted(set(current.equipment) | set(fresh.equipment)),
        targets=sorted(set(current.targets) | set(fresh.targets)),
    )
