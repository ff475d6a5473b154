from .catalog import SAMPLE_EXERCISES, load_sample_catalog, derive_facets, merge_facets, get_by_id
from .filtering import filter_exercises, matches_criteria, matches_search
from .sorting import SORT_KEYS, normalize_sort_key, sort_exercises
from .data_source import BlockingScheduler, ExerciseDataSource, FallbackScheduler, LoadResult

__all__ = [
    "SAMPLE_EXERCISES",
    "load_sample_catalog",
    "derive_facets",
    "merge_facets",
    "get_by_id",
    "filter_exercises",
    "matches_criteria",
    "matches_search",
    "SORT_KEYS",
    "normalize_sort_key",
    "sort_exercises",
    "BlockingScheduler",
    "ExerciseDataSource",
    "FallbackScheduler",
    "LoadResult",
]
