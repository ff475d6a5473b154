from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from fitexplorer.models.exercise import ExerciseRecord
from fitexplorer.services.catalog import demo_image

PLACEHOLDER_IMAGE = demo_image("Exercise Demo")
NO_INSTRUCTIONS_NOTICE = (
    "Detailed instructions not available for this exercise from the API. "
    "Please consult a fitness professional for proper form guidance."
)

DIFFICULTY_COLORS = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "red",
}

CARD_DESCRIPTION_CHARS = 120
CARD_INSTRUCTION_CHARS = 80
CARD_MAX_MUSCLES = 3
CARD_MAX_STEPS = 2


def capitalize_words(s: str | None) -> str:
    """'upper arms' -> 'Upper Arms'. Only the first letter of each word changes."""
    if not s:
        return ""
    return " ".join(w[:1].upper() + w[1:] for w in s.split(" "))


def truncate(s: str, limit: int) -> str:
    return s[:limit] + ("..." if len(s) > limit else "")


def difficulty_color(difficulty: str | None) -> str:
    return DIFFICULTY_COLORS.get((difficulty or "").lower(), "gray")


def image_url(ex: ExerciseRecord) -> str:
    return ex.gifUrl or PLACEHOLDER_IMAGE


class Badge(BaseModel):
    label: str
    color: str = "blue"


class ExerciseCard(BaseModel):
    id: str
    title: str
    image_url: str
    body_part: Badge
    difficulty: Optional[Badge] = None
    category: Optional[Badge] = None
    description: Optional[str] = None
    target: str
    equipment: str
    secondary_muscles: List[str] = Field(default_factory=list)
    more_muscles: int = 0
    steps: List[str] = Field(default_factory=list)
    more_steps: int = 0


class ExerciseDetail(BaseModel):
    id: str
    title: str
    image_url: str
    body_part: str
    target: str
    equipment: str
    difficulty: Optional[Badge] = None
    category: Optional[Badge] = None
    description: Optional[str] = None
    secondary_muscles: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    instructions_notice: Optional[str] = None


def _difficulty_badge(ex: ExerciseRecord) -> Optional[Badge]:
    if not ex.difficulty:
        return None
    return Badge(label=capitalize_words(ex.difficulty), color=difficulty_color(ex.difficulty))


def _category_badge(ex: ExerciseRecord) -> Optional[Badge]:
    if not ex.category:
        return None
    return Badge(label=capitalize_words(ex.category), color="black")


def to_card(ex: ExerciseRecord) -> ExerciseCard:
    muscles = list(ex.secondaryMuscles or [])
    steps = list(ex.instructions or [])
    return ExerciseCard(
        id=ex.id,
        title=capitalize_words(ex.name),
        image_url=image_url(ex),
        body_part=Badge(label=capitalize_words(ex.bodyPart)),
        difficulty=_difficulty_badge(ex),
        category=_category_badge(ex),
        description=truncate(ex.description, CARD_DESCRIPTION_CHARS) if ex.description else None,
        target=capitalize_words(ex.target),
        equipment=capitalize_words(ex.equipment),
        secondary_muscles=[capitalize_words(m) for m in muscles[:CARD_MAX_MUSCLES]],
        more_muscles=max(0, len(muscles) - CARD_MAX_MUSCLES),
        steps=[f"{i + 1}. {truncate(s, CARD_INSTRUCTION_CHARS)}" for i, s in enumerate(steps[:CARD_MAX_STEPS])],
        more_steps=max(0, len(steps) - CARD_MAX_STEPS),
    )


def to_cards(exercises: List[ExerciseRecord]) -> List[ExerciseCard]:
    return [to_card(ex) for ex in exercises]


def to_detail(ex: ExerciseRecord) -> ExerciseDetail:
    steps = list(ex.instructions or [])
    return ExerciseDetail(
        id=ex.id,
        title=capitalize_words(ex.name),
        image_url=image_url(ex),
        body_part=capitalize_words(ex.bodyPart),
        target=capitalize_words(ex.target),
        equipment=capitalize_words(ex.equipment),
        difficulty=_difficulty_badge(ex),
        category=_category_badge(ex),
        description=ex.description or None,
        secondary_muscles=[capitalize_words(m) for m in (ex.secondaryMuscles or [])],
        steps=steps,
        instructions_notice=None if steps else NO_INSTRUCTIONS_NOTICE,
    )
