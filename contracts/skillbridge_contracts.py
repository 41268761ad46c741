"""Contracts for the SkillBridge CRUD / recommendation API.

Attribute names are the snake_case form of the wire fields; models dump
with ``by_alias=True`` so the server keeps receiving its camelCase keys.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class Resource(str, Enum):
    """Collections exposed under /api/v1."""
    CLIENTE = "Cliente"
    JOB = "Job"

    @property
    def wrapper_key(self) -> str:
        """Key that wraps each record in HATEOAS-style list items."""
        return self.value.lower()


class WireModel(BaseModel):
    """Base for wire DTOs: accepts aliases or field names, keeps unknown fields."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class LoginRequest(WireModel):
    email: str
    senha: str


class ClienteRequest(WireModel):
    """Body of POST/PUT /api/v1/Cliente."""
    nome: str
    email: str
    senha: str
    profissao_atual: Optional[str] = Field(default=None, alias="profissaoAtual")
    competencias: str = ""


class ClienteResponse(WireModel):
    """A client record as returned by the API."""
    id: Optional[int] = None
    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    profissao_atual: Optional[str] = Field(default=None, alias="profissaoAtual")
    competencias: Optional[str] = None
    resumo: Optional[str] = None


class LoginResponse(WireModel):
    token: Optional[str] = None
    cliente: Optional[ClienteResponse] = None


class JobRequest(WireModel):
    """Body of POST/PUT /api/v1/Job."""
    titulo: str
    requisitos: str
    empresa: str


class JobResponse(WireModel):
    """A job record as returned by the API."""
    id: Optional[int] = None
    titulo: Optional[str] = None
    requisitos: Optional[str] = None
    empresa: Optional[str] = None


class JobRecommendation(JobResponse):
    """A job with the relevance score computed by the recommender."""
    score: Optional[float] = None
