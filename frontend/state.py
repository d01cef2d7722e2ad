"""
View-state controller.

Owns the ViewState, turns user intent (initial activation, department
selection) into fetches and publishes a fresh immutable snapshot to every
subscriber after each mutation.

Concurrency: operations are coroutines on a single event loop; the blocking
fetcher runs in a worker thread. Overlapping selections are not cancelled,
so whichever students response resolves last wins.

Public API:
    ViewState
    Controller(fetcher)
    Controller.subscribe(listener)     → unsubscribe callable
    await Controller.initialize()
    await Controller.on_dept_change(name)
"""

import asyncio
import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass

from frontend.fetcher import DataFetcher, NetworkError
from frontend.models import Department, Student

log = logging.getLogger("frontend")

DEPARTMENTS_LOAD_ERROR = "Erreur lors du chargement des départements"
STUDENTS_LOAD_ERROR    = "Erreur lors du chargement des étudiants"


@dataclass(frozen=True)
class ViewState:
    departments: tuple[Department, ...] = ()
    selected_dept: str = ""          # "" → nothing selected
    students: tuple[Student, ...] = ()
    loading: bool = False
    error: str | None = None


Listener = Callable[[ViewState], None]


class Controller:
    def __init__(self, fetcher: DataFetcher):
        self.fetcher    = fetcher
        self.state      = ViewState()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        self.state = dataclasses.replace(self.state, **changes)
        for listener in list(self._listeners):
            listener(self.state)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the department list once, on first activation."""
        try:
            departments = await asyncio.to_thread(self.fetcher.fetch_departments)
        except NetworkError as exc:
            log.error("Failed to fetch departments from %s: %s", exc.url, exc)
            self._update(error=DEPARTMENTS_LOAD_ERROR)
            return
        except Exception:
            log.exception("Unexpected failure while fetching departments")
            self._update(error=DEPARTMENTS_LOAD_ERROR)
            return
        self._update(departments=tuple(departments))

    async def on_dept_change(self, name: str) -> None:
        if not name:
            self._update(selected_dept=name, students=())
            return

        self._update(selected_dept=name, loading=True, error=None)
        # Published exactly once, whatever happens to the fetch
        changes: dict = {"loading": False}
        try:
            changes["students"] = tuple(await asyncio.to_thread(self.fetcher.fetch_students, name))
        except NetworkError as exc:
            log.error("Failed to fetch students of %r from %s: %s", name, exc.url, exc)
            changes["error"] = STUDENTS_LOAD_ERROR
        except Exception:
            log.exception("Unexpected failure while fetching students of %r", name)
            changes["error"] = STUDENTS_LOAD_ERROR
        finally:
            # On failure the previous student list is left in place
            self._update(**changes)


def log_transitions(state: ViewState) -> None:
    """Subscriber that traces every state change at DEBUG."""
    log.debug(
        "state: dept=%r  departments=%d  students=%d  loading=%s  error=%r",
        state.selected_dept, len(state.departments), len(state.students),
        state.loading, state.error,
    )
