"""Generic REST client for the entity administration backend.

This module defines a thin typed wrapper around the backend's REST
resources.  Every resource follows the same conventions:

* ``GET /<resource>`` returns the collection.
* ``GET /<resource>/<id>`` returns one record.
* ``POST /<resource>`` creates a record and returns it with its new id.
* ``PUT /<resource>/<id>`` applies a partial update and returns the record.
* ``DELETE /<resource>/<id>`` removes the record.

:class:`ApiClient` owns the ``requests`` session, base URL, headers and
timeout.  :class:`ApiService` binds a client to one resource path and
the pydantic models describing its records, and exposes
:meth:`~ApiService.get_all`, :meth:`~ApiService.get_by_id`,
:meth:`~ApiService.create`, :meth:`~ApiService.update` and
:meth:`~ApiService.delete`.

Any transport failure, non-2xx response or unreadable payload raises
:class:`ApiError`.  Nothing is retried; callers decide how to surface
the failure.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError

from entity_admin.core.config import Settings, settings as default_settings


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Keys under which some backends wrap a collection instead of
# returning a bare JSON array.
_COLLECTION_KEYS = ("data", "items", "results")


class ApiError(Exception):
    """Raised when a request to the backend fails.

    Attributes:
        message: Human readable description of the failure.
        status_code: HTTP status code, or ``None`` for transport errors
            and unreadable payloads.
        method: HTTP method of the failed request.
        url: Full URL of the failed request.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.method = method
        self.url = url

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.status_code}: {self.message}"
        return self.message


class ApiClient:
    """HTTP transport shared by all resource services."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3001/api``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` is included
                in all requests.
            timeout: Seconds to wait for a response.  ``None`` waits
                indefinitely.
            session: Optional requests session.  If not supplied a
                session is created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_settings(
        cls, config: Optional[Settings] = None, *, session: Optional[requests.Session] = None
    ) -> "ApiClient":
        """Build a client from :class:`Settings` (the module defaults if omitted)."""
        config = config or default_settings
        return cls(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=config.request_timeout or None,
            session=session,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def request(self, method: str, path: str, *, json_body: Any = None) -> Any:
        """Perform an HTTP request and return the decoded JSON body.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/entities/3``).
            json_body: JSON body to send with the request.
        Returns:
            The parsed JSON response, or ``None`` when the response has
            no body.
        Raises:
            ApiError: On connection problems, non-2xx statuses or a body
                that is not valid JSON.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = _error_message(exc.response) if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, url, status, message)
            raise ApiError(message, status_code=status, method=method, url=url) from exc
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, url, exc)
            raise ApiError(str(exc), method=method, url=url) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("API request %s %s returned invalid JSON", method, url)
            raise ApiError(
                "Invalid JSON in response", status_code=response.status_code, method=method, url=url
            ) from exc


def _error_message(response: requests.Response) -> str:
    """Extract a readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)


class ApiService(Generic[T]):
    """CRUD operations on one REST resource.

    Args:
        client: Transport used for every request.
        endpoint: Resource path, e.g. ``"entities"`` or ``"/branch-hours"``.
        model: Pydantic model for records returned by the backend.
        create_model: Model validating ``create`` payloads (records
            without ``id``).  Defaults to sending mappings unchecked.
        update_model: Model validating ``update`` payloads; all of its
            fields should be optional.
    """

    def __init__(
        self,
        client: ApiClient,
        endpoint: str,
        model: Type[T],
        *,
        create_model: Optional[Type[BaseModel]] = None,
        update_model: Optional[Type[BaseModel]] = None,
    ) -> None:
        self.client = client
        self.endpoint = "/" + endpoint.strip("/")
        self.model = model
        self.create_model = create_model
        self.update_model = update_model

    def __repr__(self) -> str:
        return f"ApiService({self.endpoint!r}, {self.model.__name__})"

    def get_all(self) -> List[T]:
        """Return every record of the collection."""
        data = self.client.request("GET", self.endpoint)
        if isinstance(data, dict):
            for key in _COLLECTION_KEYS:
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
        if not isinstance(data, list):
            logger.warning("GET %s did not return a list; treating as empty", self.endpoint)
            return []
        return [self._parse(item, "GET", self.endpoint) for item in data]

    def get_by_id(self, record_id: int) -> T:
        """Return the record with ``record_id``.

        A missing record surfaces as the backend's error (usually 404).
        """
        path = self._item_path(record_id)
        data = self.client.request("GET", path)
        return self._parse(data, "GET", path)

    def create(self, data: Union[BaseModel, Mapping[str, Any]]) -> T:
        """Create a record and return it as stored by the backend."""
        payload = self._payload(data, self.create_model, partial=False)
        result = self.client.request("POST", self.endpoint, json_body=payload)
        record = self._parse(result, "POST", self.endpoint)
        logger.info("Created %s record %s", self.endpoint, getattr(record, "id", None))
        return record

    def update(self, record_id: int, data: Union[BaseModel, Mapping[str, Any]]) -> T:
        """Apply a partial update and return the updated record.

        Only fields present in ``data`` are sent.  When the backend
        acknowledges without a body, the record is fetched again.
        """
        path = self._item_path(record_id)
        payload = self._payload(data, self.update_model, partial=True)
        result = self.client.request("PUT", path, json_body=payload)
        logger.info("Updated %s record %s", self.endpoint, record_id)
        if result is None:
            return self.get_by_id(record_id)
        return self._parse(result, "PUT", path)

    def delete(self, record_id: int) -> None:
        """Delete the record with ``record_id``."""
        self.client.request("DELETE", self._item_path(record_id))
        logger.info("Deleted %s record %s", self.endpoint, record_id)

    def _item_path(self, record_id: int) -> str:
        return f"{self.endpoint}/{record_id}"

    def _payload(
        self,
        data: Union[BaseModel, Mapping[str, Any]],
        schema: Optional[Type[BaseModel]],
        *,
        partial: bool,
    ) -> Dict[str, Any]:
        # Payloads never carry the identifier; it lives in the URL or is
        # assigned by the backend.
        if isinstance(data, BaseModel):
            payload = data.model_dump(mode="json", exclude_unset=partial)
        else:
            raw = {key: value for key, value in data.items() if key != "id"}
            if schema is None:
                return raw
            payload = schema.model_validate(raw).model_dump(mode="json", exclude_unset=partial)
        payload.pop("id", None)
        return payload

    def _parse(self, data: Any, method: str, path: str) -> T:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected %s payload from %s %s: %s", self.model.__name__, method, path, exc)
            raise ApiError(
                f"Unexpected {self.model.__name__} payload",
                method=method,
                url=f"{self.client.base_url}{path}",
            ) from exc
