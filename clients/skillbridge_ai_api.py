"""Client for the SkillBridge generative AI API (FastAPI backend).

The /gen endpoints render documents server-side and answer with text/html;
the returned string is the complete document, ready for a preview or export.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from contracts import CvHtmlRequest, DemoCvRequest, ExplainRequest, PlanRequest

from .cancellation import CancelToken
from .http import BaseHTTPClient, Payload


class SkillBridgeAIClient(BaseHTTPClient):
    """HTML document generation against one AI API instance."""

    default_headers: Dict[str, str] = {
        "Accept": "text/html, application/json",
        "Content-Type": "application/json",
    }

    def get_health(self, cancel: Optional[CancelToken] = None) -> Any:
        """GET /health (lowercase, unlike the CRUD API)."""
        return self.request("GET", "/health", cancel=cancel)

    def _generate(
        self,
        path: str,
        body: Optional[Payload],
        cancel: Optional[CancelToken],
    ) -> str:
        return self.request("POST", path, json_body=body, cancel=cancel, expect="text")

    def generate_cv_html(
        self,
        body: Union[CvHtmlRequest, Payload],
        cancel: Optional[CancelToken] = None,
    ) -> str:
        """CV rendered from the user's own data."""
        return self._generate("/gen/cv/html", body, cancel)

    def generate_demo_cv_html(
        self,
        body: Optional[Union[DemoCvRequest, Payload]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> str:
        """CV for a randomly generated profile."""
        return self._generate("/gen/cv/html/demo", body or DemoCvRequest(), cancel)

    def generate_plan_html(
        self,
        body: Union[PlanRequest, Payload],
        cancel: Optional[CancelToken] = None,
    ) -> str:
        """Reskilling / career plan."""
        return self._generate("/gen/plan", body, cancel)

    def generate_explain_html(
        self,
        body: Union[ExplainRequest, Payload],
        cancel: Optional[CancelToken] = None,
    ) -> str:
        return self._generate("/gen/explain/html", body, cancel)
