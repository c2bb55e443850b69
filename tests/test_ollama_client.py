"""
Tests for OllamaService - request shape, parsing, errors, health
"""
from unittest.mock import Mock

import pytest
import requests

from config import GenerationConfig
from services.ollama_client import GenerationError, MALFORMED_RESPONSE, OllamaService


def _response(status=200, payload=None, text=""):
    response = Mock()
    response.status_code = status
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def service(session):
    return OllamaService(GenerationConfig(base_url="http://ollama:11434", model="llama3.2:3b"), session=session)


class TestGenerate:

    def test_posts_prompt_with_options(self, service, session):
        session.post.return_value = _response(payload={"response": "Hello", "done": True})

        assert service.generate("short prompt") == "Hello"

        url = session.post.call_args.args[0]
        body = session.post.call_args.kwargs["json"]
        assert url == "http://ollama:11434/api/generate"
        assert body["model"] == "llama3.2:3b"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.1, "top_p": 0.9, "num_predict": 512, "num_ctx": 8192}
        assert session.post.call_args.kwargs["timeout"] == (30.0, 600.0)

    def test_long_prompt_gets_larger_token_budget(self, service, session):
        session.post.return_value = _response(payload={"response": "ok"})

        service.generate("x" * 1200)

        assert session.post.call_args.kwargs["json"]["options"]["num_predict"] == 2048

    def test_non_200_raises(self, service, session):
        session.post.return_value = _response(status=500, text="model not found")

        with pytest.raises(GenerationError, match="500"):
            service.generate("prompt")

    def test_transport_error_raises(self, service, session):
        session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(GenerationError):
            service.generate("prompt")

    def test_undecodable_body_returns_apology(self, service, session):
        session.post.return_value = _response(payload=ValueError("bad json"), text="<html>")

        assert service.generate("prompt") == MALFORMED_RESPONSE

    def test_missing_response_field_returns_apology(self, service, session):
        session.post.return_value = _response(payload={"done": True})

        assert service.generate("prompt") == MALFORMED_RESPONSE

    def test_escaped_characters_preserved(self, service, session):
        session.post.return_value = _response(payload={"response": 'line "one"\nline\ttwo'})

        assert service.generate("prompt") == 'line "one"\nline\ttwo'


class TestHealthCheck:

    def test_healthy_on_200(self, service, session):
        session.get.return_value = _response(status=200)

        assert service.health_check() is True
        assert session.get.call_args.args[0] == "http://ollama:11434/api/tags"
        assert session.get.call_args.kwargs["timeout"] == 10.0

    def test_unhealthy_on_error_status(self, service, session):
        session.get.return_value = _response(status=503)

        assert service.health_check() is False

    def test_unhealthy_when_unreachable(self, service, session):
        session.get.side_effect = requests.Timeout("timed out")

        assert service.health_check() is False
