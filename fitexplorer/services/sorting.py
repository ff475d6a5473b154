from __future__ import annotations

import logging
import unicodedata
from typing import Callable, List, Sequence, get_args

from fitexplorer.models.exercise import DEFAULT_SORT_KEY, ExerciseRecord, SortKey

logger = logging.getLogger(__name__)

SORT_KEYS: tuple[str, ...] = get_args(SortKey)


def normalize_sort_key(key: str | None) -> SortKey:
    """Unknown or empty keys sort by name."""
    if key in SORT_KEYS:
        return key  # type: ignore[return-value]
    return DEFAULT_SORT_KEY


def collation_key(text: str) -> tuple[str, str]:
    """Primary key ignores case and accents ('é' sorts with 'e'); the casefolded text breaks ties."""
    folded = text.casefold()
    base = "".join(c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c))
    return (base, folded)


def _field_key(field: str) -> Callable[[ExerciseRecord], tuple[str, str]]:
    def key(ex: ExerciseRecord) -> tuple[str, str]:
        value = getattr(ex, field, None)
        return collation_key(value if isinstance(value, str) else "")

    return key


def sort_exercises(exercises: Sequence[ExerciseRecord], key: str = DEFAULT_SORT_KEY) -> List[ExerciseRecord]:
    """Case- and accent-insensitive ordering on one field. Ties keep their input order; the input is not touched."""
    field = normalize_sort_key(key)
    logger.debug("Sorting %d exercises by %s", len(exercises), field)
    # sorted() is stable
    return sorted(exercises, key=_field_key(field))
