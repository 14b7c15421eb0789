"""
FastAPI endpoint tests and console entry point tests.

Uses httpx + FastAPI TestClient — no real server needed.
"""

from __future__ import annotations

import api
import main
import pytest
from api import app
from fastapi.testclient import TestClient

from wordcalc.pipeline import ExpressionPipeline

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def _warm_pipeline() -> None:
    """Initialise the pipeline once for all API tests (bypasses lifespan)."""
    api._pipeline = ExpressionPipeline()
    yield  # type: ignore[misc]
    api._pipeline = None


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200

    def test_health_response_shape(self) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"


class TestEvaluateEndpoint:
    def test_precedence(self) -> None:
        resp = client.post("/evaluate", json={"expression": "2 + 3 * 4"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["result"] == "14"
        assert data["postfix"] == ["2", "3", "4", "*", "+"]
        assert data["expression"] == "2 + 3 * 4"

    def test_number_words(self) -> None:
        data = client.post("/evaluate", json={"expression": "two hundred three"}).json()
        assert data["result"] == "203"

    def test_fractional_result(self) -> None:
        data = client.post("/evaluate", json={"expression": "10 / 4"}).json()
        assert data["result"] == "2.5"

    def test_division_by_zero_is_422(self) -> None:
        resp = client.post("/evaluate", json={"expression": "5 / 0"})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["code"] == "DIVISION_BY_ZERO"
        assert "Division by zero" in detail["message"]

    def test_unbalanced_is_422(self) -> None:
        resp = client.post("/evaluate", json={"expression": "(1 + 2"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "UNBALANCED_PARENTHESES"

    def test_overflow_is_422(self) -> None:
        resp = client.post("/evaluate", json={"expression": "quintillion ^ 60000"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "ARITHMETIC_OVERFLOW"

    def test_exponent_over_limit_is_422(self) -> None:
        resp = client.post("/evaluate", json={"expression": "2 ^ 1000000000000"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "INVALID_EXPONENT"

    def test_invalid_character_reports_position(self) -> None:
        detail = client.post("/evaluate", json={"expression": "1 # 2"}).json()["detail"]
        assert detail["code"] == "INVALID_INPUT"
        assert detail["details"]["position"] == 2


class TestRequestValidation:
    def test_empty_body_returns_422(self) -> None:
        resp = client.post("/evaluate", json={})
        assert resp.status_code == 422

    def test_empty_expression_returns_422(self) -> None:
        resp = client.post("/evaluate", json={"expression": ""})
        assert resp.status_code == 422


class TestFileUploadEndpoint:
    def test_upload_text_file(self) -> None:
        resp = client.post(
            "/evaluate/file",
            files={"file": ("expr.txt", b"two plus three\n", "text/plain")},
        )
        assert resp.status_code == 200
        assert resp.json()["result"] == "5"

    def test_upload_blank_file(self) -> None:
        resp = client.post(
            "/evaluate/file",
            files={"file": ("expr.txt", b"   ", "text/plain")},
        )
        assert resp.status_code == 422

    def test_upload_non_utf8(self) -> None:
        resp = client.post(
            "/evaluate/file",
            files={"file": ("expr.txt", b"\xff\xfe1+2", "text/plain")},
        )
        assert resp.status_code == 400


class TestConsole:
    def test_prints_result(self, capsys) -> None:
        assert main.main(["(2", "+", "3)", "*", "4"]) == 0
        assert capsys.readouterr().out.strip() == "Eval: 20"

    def test_error_exit_code(self, capsys) -> None:
        assert main.main(["5 / 0"]) == 1
        assert "DIVISION_BY_ZERO" in capsys.readouterr().err

    def test_prompts_when_no_arguments(self, capsys, monkeypatch) -> None:
        monkeypatch.setattr("builtins.input", lambda prompt: "two plus three")
        assert main.main([]) == 0
        assert "Eval: 5" in capsys.readouterr().out

    def test_textbook_mode_from_env(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("WORDCALC_TEXTBOOK_PRECEDENCE", "true")
        assert main.main(["8 - 3 - 2"]) == 0
        assert "Eval: 3" in capsys.readouterr().out

    def test_overflow_exit_code(self, capsys) -> None:
        assert main.main(["quintillion ^ 60000"]) == 1
        assert "ARITHMETIC_OVERFLOW" in capsys.readouterr().err
