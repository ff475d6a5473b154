from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional


SortKey = Literal["name", "bodyPart", "equipment", "target"]

DEFAULT_SORT_KEY: SortKey = "name"

# Fields searched by free text, in match order
SEARCH_FIELDS: tuple[str, ...] = ("name", "target", "equipment", "bodyPart")


class ExerciseRecord(BaseModel):
    """One exercise as returned by ExerciseDB.

    Attribute names follow the API's camelCase keys so that records can be
    validated straight from the JSON payload.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "id": "0001",
                    "name": "3/4 sit-up",
                    "bodyPart": "waist",
                    "equipment": "body weight",
                    "target": "abs",
                    "secondaryMuscles": ["hip flexors", "lower back"],
                    "instructions": ["Lie flat on your back.", "Curl up three quarters of the way."],
                }
            ]
        },
    )

    id: str = Field(..., description="ExerciseDB id, e.g. 0001")
    name: str
    bodyPart: str
    equipment: str
    target: str
    secondaryMuscles: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list, description="Ordered steps")
    description: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    gifUrl: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("secondaryMuscles", "instructions", mode="before")
    @classmethod
    def _null_list(cls, v: object) -> object:
        return [] if v is None else v
