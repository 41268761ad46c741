"""Tests for the SkillBridge CLI."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests
from click.testing import CliRunner

from clients import SkillBridgeAIClient, SkillBridgeClient
from fakes import AI_BASE, API_BASE, make_response, sent
import main


@pytest.fixture
def fake_session():
    fake = MagicMock()
    fake.headers = {}
    fake.request.return_value = make_response(body=[])
    return fake


@pytest.fixture
def run(fake_session):
    """Invoke the CLI with both clients bound to the fake session."""
    runner = CliRunner()

    def _run(*args):
        api = SkillBridgeClient(API_BASE, session=fake_session)
        ai = SkillBridgeAIClient(AI_BASE, session=fake_session)
        with patch("main.get_api_client", return_value=api), \
                patch("main.get_ai_client", return_value=ai):
            return runner.invoke(main.cli, list(args))

    return _run


class TestListCommands:

    def test_clients_table(self, run, fake_session):
        fake_session.request.return_value = make_response(
            body={"items": [{"cliente": {"id": 4, "nome": "Ana", "email": "ana@x.com"}}]}
        )
        result = run("clients", "--page", "2", "--page-size", "5", "--nome", "Ana")
        assert result.exit_code == 0, result.output
        assert "Ana" in result.output
        assert sent(fake_session)[2]["params"] == {"nome": "Ana", "page": 2, "pageSize": 5}

    def test_jobs_empty(self, run, fake_session):
        fake_session.request.return_value = make_response(body={"unexpected": "shape"})
        result = run("jobs")
        assert result.exit_code == 0
        assert "no data" in result.output

    def test_recommend_scores(self, run, fake_session):
        fake_session.request.return_value = make_response(
            body=[{"id": 1, "titulo": "SRE", "empresa": "Acme", "score": 0.9}]
        )
        result = run("recommend", "7", "--top-n", "1")
        assert result.exit_code == 0, result.output
        assert "0.90" in result.output
        assert sent(fake_session)[2]["params"] == {"topN": 1}

    def test_token_option_sets_header(self, run, fake_session):
        run("--token", "abc", "jobs")
        assert sent(fake_session)[2]["headers"]["Authorization"] == "Bearer abc"


class TestErrors:

    def test_http_error_exits_1(self, run, fake_session):
        fake_session.request.return_value = make_response(status=401, body={"title": "Unauthorized"})
        result = run("clients")
        assert result.exit_code == 1
        assert "401" in result.output
        assert "Unauthorized" in result.output

    def test_abort_exits_130(self, run):
        with patch("main.CancelToken.after") as after:
            token = MagicMock()
            token.raise_if_cancelled.side_effect = main.RequestAborted("GET aborted")
            after.return_value = token
            result = run("--timeout", "1", "jobs")
        assert result.exit_code == 130


class TestDocuments:

    def test_cv_written_to_file(self, run, fake_session, tmp_path):
        data = tmp_path / "dados.json"
        data.write_text(json.dumps({"nome": "Ana"}), encoding="utf-8")
        out = tmp_path / "out" / "cv.html"
        fake_session.request.return_value = make_response(text="<html>cv</html>", content_type="text/html")

        result = run("cv", "--data", str(data), "--lang", "pt-BR", "--output", str(out))
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == "<html>cv</html>"
        assert sent(fake_session)[2]["json"] == {"dados": {"nome": "Ana"}, "idioma": "pt-BR"}

    def test_plan_requires_skills(self, run):
        result = run("plan")
        assert result.exit_code == 2

    def test_plan_printed(self, run, fake_session):
        fake_session.request.return_value = make_response(text="<html>plano</html>", content_type="text/html")
        result = run("plan", "--hard", "Python", "--goal", "Data Engineer")
        assert result.exit_code == 0, result.output
        assert "<html>plano</html>" in result.output


class TestLogin:

    def test_login_prints_token(self, run, fake_session):
        fake_session.request.return_value = make_response(
            body={"token": "jwt-9", "cliente": {"id": 1, "nome": "Ana"}}
        )
        result = run("login", "--email", "ana@x.com", "--password", "pw", "--show-token")
        assert result.exit_code == 0, result.output
        assert "jwt-9" in result.output

    def test_login_without_token_fails(self, run, fake_session):
        fake_session.request.return_value = make_response(body={})
        result = run("login", "--email", "ana@x.com", "--password", "pw")
        assert result.exit_code == 1

    def test_login_tolerates_malformed_cliente(self, run, fake_session):
        """A non-object cliente falls back to the email in the greeting."""
        fake_session.request.return_value = make_response(
            body={"token": "jwt-9", "cliente": "oops"}
        )
        result = run("login", "--email", "ana@x.com", "--password", "pw")
        assert result.exit_code == 0, result.output
        assert "ana@x.com" in result.output


class TestHealth:

    def test_reports_model_and_timestamp(self, run, fake_session):
        fake_session.request.side_effect = [
            make_response(body={"status": "Healthy"}),
            make_response(body={"status": "ok", "model": "gemini", "timestamp": "2025-01-02T03:04:05Z"}),
        ]
        result = run("health")
        assert result.exit_code == 0, result.output
        assert "Healthy" in result.output
        assert "gemini" in result.output
        assert "02/01/2025 03:04:05" in result.output

    def test_non_json_body_still_reports_other_backend(self, run, fake_session):
        fake_session.request.side_effect = [
            make_response(text="<html>proxy error</html>"),
            make_response(body={"status": "ok", "model": "gemini"}),
        ]
        result = run("health")
        assert result.exit_code == 0, result.output
        assert "non-JSON" in result.output
        assert "AI API" in result.output
        assert "gemini" in result.output

    def test_unreachable_backend_still_reports_other(self, run, fake_session):
        fake_session.request.side_effect = [
            make_response(body={"status": "Healthy"}),
            requests.ConnectionError("refused"),
        ]
        result = run("health")
        assert result.exit_code == 0, result.output
        assert "Healthy" in result.output
        assert "refused" in result.output
