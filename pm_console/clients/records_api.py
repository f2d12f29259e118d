# pm_console/clients/records_api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from ..config import settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListResult:
    """Exactly one of data / error is set; an empty collection is data=[]."""

    data: Optional[list[Any]] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DeleteResult:
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RecordsApi(Protocol):
    """What the collection store needs from a data-access collaborator."""

    def list(self) -> ListResult: ...

    def delete(self, record_id: str) -> DeleteResult: ...


def _error_message(r: httpx.Response) -> str:
    # records service errors come back as {"error": ...}, FastAPI-style
    # {"detail": ...} or {"message": ...}; fall back to the status line
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for k in ("error", "detail", "message"):
            v = body.get(k)
            if v:
                return str(v)
    return f"{r.status_code} {r.reason_phrase}".strip()


class RecordsApiClient:
    """
    Talks to one collection of the records service:

        GET    {base}/{resource}          -> [...] | {"data": [...]} | {"error": "..."}
        DELETE {base}/{resource}/{id}     -> 2xx on success

    Never raises for HTTP or transport problems; they come back as `error`.
    """

    def __init__(
        self,
        resource: str,
        *,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.resource = resource.strip("/")
        self.base = (base_url or settings.records_api_base_url).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.records_api_timeout_seconds
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, headers=self._headers(), transport=self._transport)

    def list(self) -> ListResult:
        url = f"{self.base}/{self.resource}"
        try:
            with self._client() as client:
                r = client.get(url)
        except httpx.HTTPError as e:
            log.warning("records list transport error", extra={"entity": self.resource, "error": str(e)})
            return ListResult(error=str(e) or "An error occurred")

        if r.is_error:
            return ListResult(error=_error_message(r))

        try:
            body = r.json()
        except ValueError:
            return ListResult(error="records service returned invalid JSON")

        if isinstance(body, list):
            return ListResult(data=body)
        if isinstance(body, dict):
            if body.get("error"):
                return ListResult(error=str(body["error"]))
            data = body.get("data")
            if data is None:
                return ListResult(data=[])
            if isinstance(data, list):
                return ListResult(data=data)
        return ListResult(error="records service returned an unexpected payload")

    def delete(self, record_id: str) -> DeleteResult:
        url = f"{self.base}/{self.resource}/{record_id}"
        try:
            with self._client() as client:
                r = client.delete(url)
        except httpx.HTTPError as e:
            log.warning(
                "records delete transport error",
                extra={"entity": self.resource, "record_id": record_id, "error": str(e)},
            )
            return DeleteResult(error=str(e) or "An error occurred")

        if r.is_error:
            return DeleteResult(error=_error_message(r))

        # some backends answer 200 {"error": "..."} instead of a 4xx
        if r.content:
            try:
                body = r.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                return DeleteResult(error=str(body["error"]))
        return DeleteResult()
