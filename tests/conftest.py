"""Shared fixtures: API clients bound to a fake requests session."""

from unittest.mock import MagicMock

import pytest

from clients import SkillBridgeAIClient, SkillBridgeClient
from fakes import AI_BASE, API_BASE, make_response


@pytest.fixture
def session():
    fake = MagicMock()
    fake.headers = {}
    fake.request.return_value = make_response(body=[])
    return fake


@pytest.fixture
def api(session):
    return SkillBridgeClient(API_BASE, session=session)


@pytest.fixture
def ai(session):
    return SkillBridgeAIClient(AI_BASE, session=session)
