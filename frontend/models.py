"""
Records returned by the backend.

Both models are frozen: a fetched list is replaced wholesale, never edited.
Unknown JSON fields are ignored.
"""

from pydantic import BaseModel, ConfigDict


class Department(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Student(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    firstname: str
    lastname: str
    department: Department | None = None
