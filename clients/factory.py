"""Factory for creating SkillBridge API clients from settings."""

from typing import NamedTuple, Optional

import requests

from config import Settings, settings as default_settings

from .skillbridge_ai_api import SkillBridgeAIClient
from .skillbridge_api import SkillBridgeClient


class SkillBridgeClients(NamedTuple):
    api: SkillBridgeClient
    ai: SkillBridgeAIClient


def get_api_client(
    config: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> SkillBridgeClient:
    """Build a CRUD/recommendation client.

    Args:
        config: Settings to read from (defaults to the global settings)
        session: Optional requests session to reuse

    Returns:
        SkillBridgeClient bound to the resolved base URL and startup token
    """
    config = config or default_settings
    return SkillBridgeClient(
        base_url=config.resolve_api_base(),
        token=config.api_token,
        timeout=config.request_timeout_seconds,
        session=session,
    )


def get_ai_client(
    config: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> SkillBridgeAIClient:
    """Build a generative AI client; the AI API takes no bearer token."""
    config = config or default_settings
    return SkillBridgeAIClient(
        base_url=config.resolve_ai_api_base(),
        timeout=config.request_timeout_seconds,
        session=session,
    )


def build_clients(config: Optional[Settings] = None) -> SkillBridgeClients:
    """Construct one independent client per backend.

    Each call returns fresh instances, so two environments can be driven side
    by side without sharing base URLs or tokens.
    """
    return SkillBridgeClients(api=get_api_client(config), ai=get_ai_client(config))
