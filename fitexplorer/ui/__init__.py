from .cards import ExerciseCard, ExerciseDetail, capitalize_words, to_card, to_cards, to_detail
from .theme import ThemeStore, resolve_theme, toggle_theme

__all__ = [
    "ExerciseCard",
    "ExerciseDetail",
    "capitalize_words",
    "to_card",
    "to_cards",
    "to_detail",
    "ThemeStore",
    "resolve_theme",
    "toggle_theme",
]
