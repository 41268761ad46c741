"""Query-string helpers: compaction, list filters and pt-BR date formatting."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def compact_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop ``None`` and empty-string values so they never reach the query string."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


class _Filter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_params(self) -> Dict[str, Any]:
        return compact_params(self.model_dump(by_alias=True))


class ClientFilter(_Filter):
    """Filters for GET /api/v1/Cliente.

    Only page/pageSize are documented; the other fields are sent for backends
    that implement them and ignored otherwise.
    """
    nome: Optional[str] = None
    email: Optional[str] = None
    profissao_atual: Optional[str] = Field(default=None, alias="profissaoAtual")
    competencias: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")
    sort: Optional[str] = None  # e.g. "nome,asc"


class JobFilter(_Filter):
    """Filters for GET /api/v1/Job."""
    titulo: Optional[str] = None
    empresa: Optional[str] = None
    requisitos: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")
    sort: Optional[str] = None


class RecommendationFilter(_Filter):
    """Query for GET /api/v1/recomendacao/jobs/{clientId}; the id goes in the path."""
    top_n: Optional[int] = Field(default=None, alias="topN")


_PTBR_DATETIME = re.compile(
    r"^(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2})(?::(\d{2}))?$"
)
_PTBR_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_ISO_FRACTION = re.compile(r"([T ]\d{2}:\d{2}:\d{2})\.(\d+)")


def _normalize_iso(text: str) -> str:
    # fromisoformat before 3.11 rejects "Z" and fractions other than 3 or 6 digits
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return _ISO_FRACTION.sub(
        lambda m: f"{m.group(1)}.{(m.group(2) + '0' * 6)[:6]}", text
    )


def parse_date_safe(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse ``dd/MM/yyyy[ HH:mm[:ss]]`` or ISO-8601; ``None`` when it cannot."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value

    text = str(value).strip()
    try:
        match = _PTBR_DATETIME.match(text)
        if match:
            dd, mm, yyyy, hh, mi, ss = match.groups()
            return datetime(int(yyyy), int(mm), int(dd), int(hh), int(mi), int(ss or 0))

        match = _PTBR_DATE.match(text)
        if match:
            dd, mm, yyyy = match.groups()
            return datetime(int(yyyy), int(mm), int(dd))

        return datetime.fromisoformat(_normalize_iso(text))
    except ValueError:
        return None


def format_ptbr_date(value: Union[str, datetime, None]) -> Optional[str]:
    """Format as ``dd/MM/yyyy``."""
    parsed = parse_date_safe(value)
    if parsed is None:
        return None
    return parsed.strftime("%d/%m/%Y")


def format_ptbr_datetime(value: Union[str, datetime, None]) -> Optional[str]:
    """Format as ``dd/MM/yyyy HH:mm:ss``."""
    parsed = parse_date_safe(value)
    if parsed is None:
        return None
    return parsed.strftime("%d/%m/%Y %H:%M:%S")
