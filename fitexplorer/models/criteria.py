from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FilterCriteria(BaseModel):
    """Active filter constraints. An empty string leaves that constraint unset."""

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    body_part: str = ""
    equipment: str = ""
    target: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.search_text.strip() or self.body_part or self.equipment or self.target)


EMPTY_CRITERIA = FilterCriteria()
