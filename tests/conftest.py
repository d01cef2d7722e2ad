import threading

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from frontend.fetcher import DataFetcher, NetworkError
from frontend.models import Department, Student

BASE_URL = "http://testserver"

DEPARTMENTS = [{"id": 1, "name": "CS"}, {"id": 2, "name": "Math"}]

STUDENTS = {
    "CS": [
        {"id": 10, "firstname": "Ada", "lastname": "Lovelace", "department": {"id": 1, "name": "CS"}},
    ],
    "Math": [
        {"id": 20, "firstname": "Emmy", "lastname": "Noether", "department": {"id": 2, "name": "Math"}},
        {"id": 21, "firstname": "Sofia", "lastname": "Kovalevskaya", "department": None},
    ],
    "Physics": [],
}


class StubBackend:
    """In-memory stand-in for the departments/students REST backend."""

    def __init__(self):
        self.departments = list(DEPARTMENTS)
        self.students = {k: list(v) for k, v in STUDENTS.items()}
        self.mode = "ok"          # "ok" | "error" | "garbage" | "object"
        self.seen: list[str] = []  # decoded path parameters / endpoint names

    def _respond(self, payload):
        if self.mode == "error":
            raise HTTPException(status_code=500, detail="Internal error")
        if self.mode == "garbage":
            return PlainTextResponse("<html>oops</html>")
        if self.mode == "object":
            return JSONResponse({"items": payload})
        return JSONResponse(payload)


def build_app(backend: StubBackend) -> FastAPI:
    app = FastAPI(title="Stub student backend")

    @app.get("/api/departments")
    def list_departments():
        backend.seen.append("departments")
        return backend._respond(backend.departments)

    @app.get("/api/departments/{name}/students")
    def list_students(name: str):
        backend.seen.append(name)
        return backend._respond(backend.students.get(name, []))

    return app


@pytest.fixture
def backend():
    return StubBackend()


@pytest.fixture
def client(backend):
    """FastAPI test client over the stub backend."""
    return TestClient(build_app(backend))


@pytest.fixture
def fetcher(client):
    """DataFetcher talking to the stub backend through the test client."""
    return DataFetcher(BASE_URL, session=client)


class FakeFetcher:
    """Fetcher double that returns canned data and records calls."""

    def __init__(self, departments=None, students=None, fail_departments=False, fail_students=()):
        self.departments = [Department.model_validate(d) for d in (departments or [])]
        self.students = {
            name: [Student.model_validate(s) for s in rows]
            for name, rows in (students or {}).items()
        }
        self.fail_departments = fail_departments
        self.fail_students = set(fail_students)
        self.calls: list[tuple[str, ...]] = []

    def fetch_departments(self):
        self.calls.append(("departments",))
        if self.fail_departments:
            raise NetworkError("Unexpected status 500", BASE_URL + "/api/departments", status=500)
        return list(self.departments)

    def fetch_students(self, name):
        self.calls.append(("students", name))
        if name in self.fail_students:
            raise NetworkError("Unexpected status 500", f"{BASE_URL}/api/departments/{name}/students", status=500)
        return list(self.students.get(name, []))


class GatedFetcher(FakeFetcher):
    """FakeFetcher whose students responses block until released per department."""

    def __init__(self, students):
        super().__init__(students=students)
        self.gates = {name: threading.Event() for name in students}

    def release(self, name):
        self.gates[name].set()

    def fetch_students(self, name):
        if not self.gates[name].wait(timeout=5):
            raise RuntimeError(f"gate for {name!r} never released")
        return super().fetch_students(name)
