"""Shared HTTP plumbing for the SkillBridge API clients."""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional, Union

import requests
from pydantic import BaseModel

from .cancellation import CancelToken
from .errors import (
    HTTPStatusError,
    RequestAborted,
    ResponseDecodeError,
    TransportError,
    extract_detail,
)
from .params import compact_params

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Mapping[str, Any]]

CHUNK_SIZE = 8192


def to_payload(body: Optional[Payload]) -> Optional[Any]:
    """Turn a contract model (or plain mapping) into a JSON-ready body."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(by_alias=True, exclude_none=True)
    return dict(body)


def _charset(response: requests.Response) -> str:
    # requests assumes ISO-8859-1 for text/* without a charset; the APIs send UTF-8
    content_type = response.headers.get("Content-Type") or ""
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip("\"'")
    return "utf-8"


def _close_late_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


def _decode_text(content: bytes, charset: str) -> str:
    try:
        return content.decode(charset, errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


class BaseHTTPClient:
    """Thin wrapper over a requests session bound to one backend.

    Holds the base URL and the optional bearer token for that backend; both
    can be swapped at any time and apply to the next call.
    """

    default_headers: Dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = ""
        self._token: Optional[str] = None
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.configure_base(base_url)
        self.configure_auth(token)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token(self) -> Optional[str]:
        return self._token

    def configure_base(self, url: str) -> None:
        """Point subsequent calls at ``url``. Not validated."""
        self._base_url = (url or "").rstrip("/")

    def configure_auth(self, token: Optional[str]) -> None:
        """Set the bearer token, or drop the Authorization header with ``None``."""
        self._token = token or None

    def close(self) -> None:
        self.session.close()

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        # Per request, so clients sharing a session keep their own Accept
        headers = dict(self.default_headers)
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Optional[Payload] = None,
        cancel: Optional[CancelToken] = None,
        expect: str = "json",
    ) -> Any:
        """Send one request and return the decoded body.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL.
            params: Query parameters; None/"" values are dropped.
            json_body: Request body (contract model or mapping).
            cancel: Optional token; aborts before sending, while waiting for
                the response, or mid-transfer.
            expect: "json" (parsed body, None when empty) or "text".

        Raises:
            RequestAborted: the token was cancelled.
            TransportError: no response was received.
            HTTPStatusError: non-2xx status.
            ResponseDecodeError: "json" expected but the body is not JSON.
        """
        url = self._url(path)
        if cancel is not None:
            cancel.raise_if_cancelled(method, url)

        query = compact_params(params)
        logger.debug("%s %s params=%s", method, url, query)
        kwargs = {
            "params": query or None,
            "json": to_payload(json_body),
            "headers": self._headers(),
            "timeout": self.timeout,
            "stream": True,
        }
        try:
            if cancel is None:
                response = self.session.request(method, url, **kwargs)
            else:
                response = self._send_cancellable(method, url, kwargs, cancel)
        except requests.RequestException as exc:
            if cancel is not None and cancel.cancelled:
                raise RequestAborted(f"{method} {url} aborted") from exc
            logger.warning("%s %s transport failure: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        try:
            content = self._read_body(response, method, url, cancel)
        finally:
            response.close()

        status = response.status_code
        text = _decode_text(content, _charset(response))
        logger.debug("%s %s -> %s (%d bytes)", method, url, status, len(content))

        if not 200 <= status < 300:
            try:
                body = json.loads(text) if text.strip() else None
            except ValueError:
                body = None
            detail = extract_detail(body, text)
            logger.warning("%s %s -> %s %s", method, url, status, detail or "")
            raise HTTPStatusError(
                f"{method} {url} returned HTTP {status}",
                status_code=status,
                detail=detail,
            )

        if expect == "text":
            return text
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise ResponseDecodeError(
                f"{method} {url} returned a non-JSON body",
                status_code=status,
                detail=text[:200],
            ) from exc

    def _send_cancellable(
        self,
        method: str,
        url: str,
        kwargs: Dict[str, Any],
        cancel: CancelToken,
    ) -> requests.Response:
        """Run the blocking send on a worker and return as soon as either the
        response headers arrive or the token fires.

        An abandoned send keeps running on its daemon thread; whatever it
        eventually returns is closed.
        """
        future: Future = Future()

        def send() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.session.request(method, url, **kwargs))
            except Exception as exc:
                future.set_exception(exc)

        settled = threading.Event()
        future.add_done_callback(lambda _f: settled.set())
        unregister = cancel.add_callback(settled.set)
        try:
            threading.Thread(target=send, name="skillbridge-request", daemon=True).start()
            settled.wait()
        finally:
            unregister()

        if cancel.cancelled:
            future.add_done_callback(_close_late_response)
            logger.info("%s %s aborted while waiting for the response", method, url)
            raise RequestAborted(f"{method} {url} aborted")
        return future.result()

    def _read_body(
        self,
        response: requests.Response,
        method: str,
        url: str,
        cancel: Optional[CancelToken],
    ) -> bytes:
        if cancel is not None:
            # Headers may have arrived after the token fired
            cancel.raise_if_cancelled(method, url)
            unregister = cancel.add_callback(response.close)
        else:
            unregister = None

        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if cancel is not None and cancel.cancelled:
                    raise RequestAborted(f"{method} {url} aborted")
                chunks.append(chunk)
        except RequestAborted:
            raise
        except Exception as exc:
            # Closing the response from the cancel callback surfaces as a read error
            if cancel is not None and cancel.cancelled:
                raise RequestAborted(f"{method} {url} aborted") from exc
            if isinstance(exc, requests.RequestException):
                raise TransportError(f"{method} {url} failed: {exc}") from exc
            raise
        finally:
            if unregister is not None:
                unregister()

        if cancel is not None:
            cancel.raise_if_cancelled(method, url)
        return b"".join(chunks)
