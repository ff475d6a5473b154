from .exercise import ExerciseRecord, SortKey, DEFAULT_SORT_KEY, SEARCH_FIELDS
from .criteria import FilterCriteria, EMPTY_CRITERIA
from .status import ApiStatus, ConnectionState, Facets, ResultsCount, StatusKind

__all__ = [
    "ExerciseRecord",
    "SortKey",
    "DEFAULT_SORT_KEY",
    "SEARCH_FIELDS",
    "FilterCriteria",
    "EMPTY_CRITERIA",
    "ApiStatus",
    "ConnectionState",
    "Facets",
    "ResultsCount",
    "StatusKind",
]
