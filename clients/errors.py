"""Error taxonomy for SkillBridge API calls.

Transport failures, non-2xx answers, undecodable bodies and caller aborts
propagate unmodified to the caller, which owns user-facing messaging.
"""

from typing import Any, Optional


class SkillBridgeError(Exception):
    """Base for every failure raised by the API clients."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class TransportError(SkillBridgeError):
    """No response was received (connection refused, DNS, timeout)."""


class HTTPStatusError(SkillBridgeError):
    """The server answered with a non-2xx status."""


class ResponseDecodeError(SkillBridgeError):
    """A 2xx response whose body is not valid JSON."""


class RequestAborted(SkillBridgeError):
    """The call was cancelled through its CancelToken."""


def extract_detail(body: Any, text: str = "", limit: int = 200) -> Optional[str]:
    """Pull a human-readable message out of an error response body.

    Understands FastAPI (``detail`` as string or validation list) and .NET
    ProblemDetails (``title``/``detail``) shapes, falling back to raw text.
    """
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return detail
        if isinstance(detail, list):
            messages = [
                d.get("msg", "") if isinstance(d, dict) else str(d)
                for d in detail
            ]
            joined = "; ".join(m for m in messages if m)
            if joined:
                return joined
        for key in ("title", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, str) and body:
        return body[:limit]
    text = (text or "").strip()
    return text[:limit] or None
