"""HTTP clients for the SkillBridge CRUD and generative AI APIs."""

from .cancellation import CancelToken
from .envelope import envelope_total, normalize_envelope
from .errors import (
    HTTPStatusError,
    RequestAborted,
    ResponseDecodeError,
    SkillBridgeError,
    TransportError,
)
from .factory import SkillBridgeClients, build_clients, get_ai_client, get_api_client
from .params import ClientFilter, JobFilter, RecommendationFilter, compact_params
from .skillbridge_ai_api import SkillBridgeAIClient
from .skillbridge_api import SkillBridgeClient

__all__ = [
    "CancelToken",
    "normalize_envelope",
    "envelope_total",
    "SkillBridgeError",
    "TransportError",
    "HTTPStatusError",
    "ResponseDecodeError",
    "RequestAborted",
    "SkillBridgeClients",
    "build_clients",
    "get_api_client",
    "get_ai_client",
    "ClientFilter",
    "JobFilter",
    "RecommendationFilter",
    "compact_params",
    "SkillBridgeAIClient",
    "SkillBridgeClient",
]
