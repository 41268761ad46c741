"""Contracts for the SkillBridge generative AI API.

Every /gen endpoint answers with a text/html document, so only the request
side and the health check are modelled here.
"""

from pydantic import Field
from typing import Any, Dict, List, Optional

from .skillbridge_contracts import WireModel


class AIHealth(WireModel):
    status: Optional[str] = None
    model: Optional[str] = None
    timestamp: Optional[str] = None


class CvHtmlRequest(WireModel):
    """Body of POST /gen/cv/html: free-form user data rendered as a CV."""
    dados: Dict[str, Any] = Field(default_factory=dict)
    idioma: Optional[str] = None


class DemoCvRequest(WireModel):
    """Body of POST /gen/cv/html/demo: the server invents a random profile."""
    idioma: Optional[str] = None
    tipo_perfil: Optional[str] = Field(default=None, alias="tipoPerfil")


class Perfil(WireModel):
    soft_skills: List[str] = Field(default_factory=list, alias="softSkills")
    hard_skills: List[str] = Field(default_factory=list, alias="hardSkills")
    objetivo: Optional[str] = None
    disponibilidade_semanal_horas: Optional[float] = Field(
        default=None, alias="disponibilidadeSemanalHoras"
    )


class PlanRequest(WireModel):
    """Body of POST /gen/plan (career / reskilling plan)."""
    perfil: Perfil
    idioma: Optional[str] = None


class ExplainRequest(WireModel):
    """Body of POST /gen/explain/html (coach-style explanation)."""
    contexto: Dict[str, Any] = Field(default_factory=dict)
    idioma: Optional[str] = None
