"""Client for the SkillBridge CRUD / recommendation API (.NET backend)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from contracts import ClienteRequest, JobRequest, LoginRequest, Resource

from .cancellation import CancelToken
from .envelope import normalize_envelope
from .http import BaseHTTPClient, Payload
from .params import ClientFilter, JobFilter, RecommendationFilter

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

API_PREFIX = "/api/v1"


def _resource(resource: Union[Resource, str]) -> Resource:
    if isinstance(resource, Resource):
        return resource
    for member in Resource:
        if member.value.lower() == str(resource).lower():
            return member
    raise ValueError(
        f"Unknown resource: {resource}. Available: {[r.value for r in Resource]}"
    )


class SkillBridgeClient(BaseHTTPClient):
    """CRUD, auth and recommendation calls against one SkillBridge API instance.

    List endpoints return plain record dicts in server order, whatever
    envelope the server chose; see ``clients.envelope``.
    """

    # ---------------- Auth ----------------

    def login(
        self,
        email: str,
        senha: str,
        cancel: Optional[CancelToken] = None,
    ) -> Record:
        """POST /Auth/login; a returned token becomes the session token."""
        body = self.request(
            "POST",
            f"{API_PREFIX}/Auth/login",
            json_body=LoginRequest(email=email, senha=senha),
            cancel=cancel,
        )
        result = body if isinstance(body, dict) else {}
        token = result.get("token")
        if token:
            self.configure_auth(token)
            logger.info("Logged in as %s", email)
        return result

    def logout(self) -> None:
        self.configure_auth(None)

    # ---------------- Lists ----------------

    def _list(
        self,
        resource: Resource,
        page: int,
        page_size: int,
        cancel: Optional[CancelToken],
        extra: Optional[Dict[str, Any]] = None,
    ) -> List[Record]:
        params = dict(extra or {})
        params.update({"page": page, "pageSize": page_size})
        raw = self.request(
            "GET", f"{API_PREFIX}/{resource.value}", params=params, cancel=cancel
        )
        records = normalize_envelope(raw, resource.wrapper_key)
        if not records and raw:
            logger.debug("%s list: unrecognized or empty envelope", resource.value)
        return records

    def list_clients(
        self,
        page: int = 1,
        page_size: int = 10,
        cancel: Optional[CancelToken] = None,
        filters: Optional[ClientFilter] = None,
    ) -> List[Record]:
        """GET /Cliente, flattened to client records."""
        extra = filters.to_params() if filters is not None else None
        return self._list(Resource.CLIENTE, page, page_size, cancel, extra)

    def list_jobs(
        self,
        page: int = 1,
        page_size: int = 10,
        cancel: Optional[CancelToken] = None,
        filters: Optional[JobFilter] = None,
    ) -> List[Record]:
        """GET /Job, flattened to job records."""
        extra = filters.to_params() if filters is not None else None
        return self._list(Resource.JOB, page, page_size, cancel, extra)

    # ---------------- Generic CRUD ----------------

    def create_record(
        self,
        resource: Union[Resource, str],
        payload: Payload,
        cancel: Optional[CancelToken] = None,
    ) -> Any:
        res = _resource(resource)
        return self.request(
            "POST", f"{API_PREFIX}/{res.value}", json_body=payload, cancel=cancel
        )

    def update_record(
        self,
        resource: Union[Resource, str],
        record_id: int,
        payload: Payload,
        cancel: Optional[CancelToken] = None,
    ) -> Any:
        res = _resource(resource)
        return self.request(
            "PUT",
            f"{API_PREFIX}/{res.value}/{record_id}",
            json_body=payload,
            cancel=cancel,
        )

    def delete_record(
        self,
        resource: Union[Resource, str],
        record_id: int,
        cancel: Optional[CancelToken] = None,
    ) -> None:
        res = _resource(resource)
        self.request("DELETE", f"{API_PREFIX}/{res.value}/{record_id}", cancel=cancel)

    # ---------------- Typed conveniences ----------------

    def create_cliente(
        self, data: Union[ClienteRequest, Payload], cancel: Optional[CancelToken] = None
    ) -> Any:
        return self.create_record(Resource.CLIENTE, data, cancel=cancel)

    def update_cliente(
        self,
        cliente_id: int,
        data: Union[ClienteRequest, Payload],
        cancel: Optional[CancelToken] = None,
    ) -> Any:
        return self.update_record(Resource.CLIENTE, cliente_id, data, cancel=cancel)

    def delete_cliente(self, cliente_id: int, cancel: Optional[CancelToken] = None) -> None:
        self.delete_record(Resource.CLIENTE, cliente_id, cancel=cancel)

    def create_job(
        self, data: Union[JobRequest, Payload], cancel: Optional[CancelToken] = None
    ) -> Any:
        return self.create_record(Resource.JOB, data, cancel=cancel)

    def update_job(
        self,
        job_id: int,
        data: Union[JobRequest, Payload],
        cancel: Optional[CancelToken] = None,
    ) -> Any:
        return self.update_record(Resource.JOB, job_id, data, cancel=cancel)

    def delete_job(self, job_id: int, cancel: Optional[CancelToken] = None) -> None:
        self.delete_record(Resource.JOB, job_id, cancel=cancel)

    # ---------------- Recommendations ----------------

    def get_recommendations(
        self,
        client_id: int,
        top_n: int = 5,
        cancel: Optional[CancelToken] = None,
    ) -> List[Record]:
        """GET /recomendacao/jobs/{client_id}; anything but a bare array yields []."""
        raw = self.request(
            "GET",
            f"{API_PREFIX}/recomendacao/jobs/{client_id}",
            params=RecommendationFilter(top_n=top_n).to_params(),
            cancel=cancel,
        )
        if isinstance(raw, list):
            return raw
        logger.debug("recommendations for %s: non-array body ignored", client_id)
        return []

    # ---------------- Health ----------------

    def get_health(self, cancel: Optional[CancelToken] = None) -> Any:
        return self.request("GET", f"{API_PREFIX}/Health", cancel=cancel)
