"""
Data fetcher: the stateless boundary to the departments/students REST API.

Endpoints consumed:
    GET {base}/api/departments                     → [{"id", "name"}, ...]
    GET {base}/api/departments/{name}/students     → [{"id", "firstname",
                                                      "lastname", "department"}, ...]

Every failure (transport error, non-2xx status, bad JSON, unexpected payload
shape) surfaces as a single NetworkError. No retries, no caching.

Public API:
    DataFetcher(base_url, session=None, timeout=None)
    DataFetcher.fetch_departments()       → list[Department]
    DataFetcher.fetch_students(name)      → list[Student]
"""

import logging
from typing import Any
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from frontend.models import Department, Student

log = logging.getLogger("frontend")


class NetworkError(Exception):
    """A read against the backend failed. `status` is set for HTTP errors."""

    def __init__(self, message: str, url: str, status: int | None = None):
        super().__init__(message)
        self.url    = url
        self.status = status


class DataFetcher:
    def __init__(self, base_url: str, session: Any = None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        # Anything with a requests-style get(url, timeout=...) works here
        self.session  = session if session is not None else requests.Session()
        self.timeout  = timeout

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def fetch_departments(self) -> list[Department]:
        return self._get_list("/api/departments", Department)

    def fetch_students(self, department_name: str) -> list[Student]:
        # Encode the name as one path segment: "/" must not split the route
        path = f"/api/departments/{quote(department_name, safe='')}/students"
        return self._get_list(path, Student)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_list(self, path: str, model: type[BaseModel]) -> list:
        url = self.base_url + path
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise NetworkError(f"Request failed: {exc}", url) from exc

        if not 200 <= resp.status_code < 300:
            raise NetworkError(f"Unexpected status {resp.status_code}", url, status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise NetworkError(f"Response is not valid JSON: {exc}", url, status=resp.status_code) from exc

        if not isinstance(data, list):
            raise NetworkError(
                f"Expected a JSON array, got {type(data).__name__}", url, status=resp.status_code
            )

        try:
            items = [model.model_validate(item) for item in data]
        except ValidationError as exc:
            raise NetworkError(f"Malformed record: {exc}", url, status=resp.status_code) from exc

        log.info("GET %s  %d  items=%d", url, resp.status_code, len(items))
        return items
