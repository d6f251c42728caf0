"""SQLModel data models.

This module defines the `department` and `student` tables. A student
references its department by foreign key and exposes it through a
relationship so responses can embed the department record.
"""

from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship

# Placeholder identity for entities built from input payloads. The
# repository clears it on insert so the store assigns the real id.
UNASSIGNED_ID = 0

# Largest id a 64-bit integer primary key can hold.
MAX_ID = 2 ** 63 - 1


class Department(SQLModel, table=True):
    """A department students belong to. `name` is unique."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, nullable=False, unique=True)
    students: List['Student'] = Relationship(back_populates='department')


class Student(SQLModel, table=True):
    """A student enrolled in exactly one `Department`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    firstname: str
    lastname: str
    department_id: Optional[int] = Field(default=None, foreign_key='department.id')
    department: Optional[Department] = Relationship(back_populates='students')
