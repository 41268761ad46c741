"""Pydantic contracts for the SkillBridge APIs.

Request payloads and response records exchanged with both backends are typed
through these contracts.
"""

from .skillbridge_contracts import (
    Resource,
    WireModel,
    LoginRequest,
    LoginResponse,
    ClienteRequest,
    ClienteResponse,
    JobRequest,
    JobResponse,
    JobRecommendation,
)

from .ai_contracts import (
    AIHealth,
    CvHtmlRequest,
    DemoCvRequest,
    Perfil,
    PlanRequest,
    ExplainRequest,
)

__all__ = [
    # CRUD / recommendation
    "Resource",
    "WireModel",
    "LoginRequest",
    "LoginResponse",
    "ClienteRequest",
    "ClienteResponse",
    "JobRequest",
    "JobResponse",
    "JobRecommendation",
    # Generative AI
    "AIHealth",
    "CvHtmlRequest",
    "DemoCvRequest",
    "Perfil",
    "PlanRequest",
    "ExplainRequest",
]
