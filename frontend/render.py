"""
Render decision: a pure function from ViewState to what the page shows.

The selector is always present. Below it, exactly one of: error message,
loading indicator, students table, empty-result message, or nothing.
"""

from dataclasses import dataclass, field
from enum import Enum

from frontend.models import Student
from frontend.state import ViewState

PLACEHOLDER_OPTION = "-- Choisir un département --"
LOADING_MESSAGE    = "Chargement..."
EMPTY_MESSAGE      = "Aucun étudiant trouvé dans ce département"
MISSING_DEPARTMENT = "N/A"
TABLE_COLUMNS      = ("ID", "Prénom", "Nom", "Département")


class Body(str, Enum):
    NONE    = "none"
    ERROR   = "error"
    LOADING = "loading"
    TABLE   = "table"
    EMPTY   = "empty"


@dataclass(frozen=True)
class RenderPlan:
    options: list[tuple[str, str]]                 # (value, label), blank default first
    body: Body
    message: str | None = None                     # error / loading / empty text
    heading: str | None = None
    rows: list[dict] = field(default_factory=list)
    count: int = 0
    footer: str | None = None


def student_row(student: Student) -> dict:
    dept = student.department.name if student.department and student.department.name else MISSING_DEPARTMENT
    return dict(zip(TABLE_COLUMNS, (student.id, student.firstname, student.lastname, dept)))


def count_label(count: int) -> str:
    return f"Total : {count} étudiant(s)"


def decide(state: ViewState) -> RenderPlan:
    options = [("", PLACEHOLDER_OPTION)] + [(d.name, d.name) for d in state.departments]

    if state.error:
        return RenderPlan(options, Body.ERROR, message=state.error)
    if state.loading:
        return RenderPlan(options, Body.LOADING, message=LOADING_MESSAGE)
    if state.students:
        return RenderPlan(
            options,
            Body.TABLE,
            heading=f"Étudiants du département {state.selected_dept}",
            rows=[student_row(s) for s in state.students],
            count=len(state.students),
            footer=count_label(len(state.students)),
        )
    if state.selected_dept:
        return RenderPlan(options, Body.EMPTY, message=EMPTY_MESSAGE)
    return RenderPlan(options, Body.NONE)
