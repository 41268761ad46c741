"""Fake requests responses and call inspection helpers."""

import json
from unittest.mock import MagicMock


API_BASE = "http://api.test"
AI_BASE = "http://ai.test"


def make_response(status=200, body=None, text=None, content_type="application/json"):
    """Build a streamed requests.Response stand-in."""
    if text is None:
        text = "" if body is None else json.dumps(body)
    response = MagicMock()
    response.status_code = status
    response.headers = {"Content-Type": content_type}
    response.iter_content.return_value = [text.encode("utf-8")] if text else []
    return response


def sent(session, index=-1):
    """(method, url, kwargs) of a recorded session.request call."""
    call = session.request.call_args_list[index]
    method, url = call[0]
    return method, url, call[1]
