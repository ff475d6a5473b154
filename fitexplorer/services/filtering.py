from __future__ import annotations

import logging
from typing import List, Sequence

from fitexplorer.models.criteria import FilterCriteria
from fitexplorer.models.exercise import ExerciseRecord, SEARCH_FIELDS

logger = logging.getLogger(__name__)


def _text(ex: ExerciseRecord, field: str) -> str | None:
    value = getattr(ex, field, None)
    return value if isinstance(value, str) else None


def matches_search(ex: ExerciseRecord, term: str) -> bool:
    """True if ``term`` (already lower-cased) occurs in any searchable field.

    A missing field simply does not match.
    """
    if not term:
        return True
    for field in SEARCH_FIELDS:
        value = _text(ex, field)
        if value is not None and term in value.lower():
            return True
    return False


def _matches_exact(ex: ExerciseRecord, field: str, wanted: str) -> bool:
    return not wanted or _text(ex, field) == wanted


def matches_criteria(ex: ExerciseRecord, criteria: FilterCriteria) -> bool:
    term = criteria.search_text.strip().lower()
    return (
        matches_search(ex, term)
        and _matches_exact(ex, "bodyPart", criteria.body_part)
        and _matches_exact(ex, "equipment", criteria.equipment)
        and _matches_exact(ex, "target", criteria.target)
    )


def filter_exercises(exercises: Sequence[ExerciseRecord], criteria: FilterCriteria) -> List[ExerciseRecord]:
    """Return the records matching every active constraint, in input order."""
    out: List[ExerciseRecord] = [ex for ex in exercises if matches_criteria(ex, criteria)]
    logger.debug("Filter %s kept %d of %d exercises", criteria.model_dump(), len(out), len(exercises))
    return out
