from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Task(BaseModel):
    task_id: int
    name: str
    priority: Optional[int] = None


class TaskCreate(BaseModel):
    # Reject "5", 5.0 and true instead of coercing them to integers
    model_config = ConfigDict(strict=True)

    name: str
    priority: Optional[int] = None


class TaskCreated(BaseModel):
    task_id: int


class TaskUpdate(BaseModel):
    """
    Partial update body.

    Every field has three states: omitted (left unchanged), a value
    (overwritten) or an explicit ``null`` (cleared). ``name`` cannot be
    cleared because the column is NOT NULL.
    """

    model_config = ConfigDict(strict=True)

    name: Optional[str] = None
    priority: Optional[int] = None

    @model_validator(mode="after")
    def name_not_null(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
