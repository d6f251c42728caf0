"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class StudentDto(BaseModel):
    """Payload for creating or replacing a student. Carries no id."""
    model_config = ConfigDict(populate_by_name=True)

    firstname: str
    lastname: str
    # null or missing is rejected by the department lookup, not here
    department_id: Optional[int] = Field(default=None, alias='departmentId')


class DepartmentOut(BaseModel):
    """Department as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class StudentOut(BaseModel):
    """Student with its department embedded."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str
    department: DepartmentOut
