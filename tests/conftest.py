"""Shared fixtures: an in-memory backend plugged in as the client's session."""

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
import requests

from entity_admin.client import ApiClient
from entity_admin.console import Notifier
from entity_admin.services import RESOURCES, ServiceRegistry
from entity_admin.state import MemoryStore

BASE_URL = "http://testserver/api"


def make_response(status: int, body: Any = None, url: str = BASE_URL) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeBackend(requests.Session):
    """Conventional REST backend keeping every collection in memory.

    ``fail_next`` makes the next request raise the given exception (or
    answer with the given status code when it is an ``int``).
    """

    def __init__(self) -> None:
        super().__init__()
        self.tables: Dict[str, Dict[int, Dict[str, Any]]] = {
            resource.path.strip("/"): {} for resource in RESOURCES
        }
        self.next_id = 1
        self.calls: List[Tuple[str, str, Any]] = []
        self.fail_next: Optional[Any] = None
        self.override: Optional[requests.Response] = None
        self.last_headers: Dict[str, str] = {}

    def seed(self, table: str, *records: Dict[str, Any]) -> List[Dict[str, Any]]:
        stored = []
        for record in records:
            record = dict(record)
            record.setdefault("id", self.next_id)
            self.next_id = max(self.next_id, record["id"]) + 1
            self.tables[table][record["id"]] = record
            stored.append(record)
        return stored

    def request(self, method, url, json=None, timeout=None, **kwargs):
        path = urlsplit(url).path
        self.calls.append((method, path, json))
        self.last_headers = dict(self.headers)
        if self.fail_next is not None:
            failure, self.fail_next = self.fail_next, None
            if isinstance(failure, int):
                return make_response(failure, {"detail": "Internal error"}, url)
            raise failure
        if self.override is not None:
            response, self.override = self.override, None
            return response

        parts = [part for part in path[len("/api"):].split("/") if part]
        table = self.tables.get(parts[0]) if parts else None
        if table is None or len(parts) > 2:
            return make_response(404, {"detail": "Not Found"}, url)
        if len(parts) == 1:
            if method == "GET":
                return make_response(200, list(table.values()), url)
            if method == "POST":
                record = dict(json or {})
                record["id"] = self.next_id
                self.next_id += 1
                table[record["id"]] = record
                return make_response(201, record, url)
            return make_response(405, {"detail": "Method Not Allowed"}, url)

        record_id = int(parts[1])
        if record_id not in table:
            return make_response(404, {"detail": "Record not found"}, url)
        if method == "GET":
            return make_response(200, table[record_id], url)
        if method == "PUT":
            table[record_id].update(json or {})
            return make_response(200, table[record_id], url)
        if method == "DELETE":
            del table[record_id]
            return make_response(204, None, url)
        return make_response(405, {"detail": "Method Not Allowed"}, url)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    return ApiClient(base_url=BASE_URL, session=backend)


@pytest.fixture
def registry(client):
    return ServiceRegistry(client)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def store():
    return MemoryStore()
