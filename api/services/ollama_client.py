# Copyright (c) 2024 RAG-KB Contributors
# SPDX-License-Identifier: MIT

"""Ollama generative engine client.

Single-shot completion via POST /api/generate (stream disabled) and a
health probe via GET /api/tags. Calls are never retried.
"""

import logging

import requests

from config import default_config, GenerationConfig

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE = "I apologize, but I couldn't generate a proper response. Please try again."


class GenerationError(Exception):
    """Engine unreachable or returned a non-2xx status"""
    pass


class OllamaService:
    """Generates answers with a local Ollama model."""

    def __init__(self, config: GenerationConfig = default_config.generation,
                 session: requests.Session = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def model_name(self) -> str:
        return self.config.model

    def generate(self, prompt: str) -> str:
        """Complete a prompt.

        Raises:
            GenerationError: transport failure or non-2xx status

        Returns the fixed apology text when the response body cannot be parsed.
        """
        logger.debug(f"Generating response using model: {self.config.model}")
        try:
            response = self.session.post(
                f"{self.config.base_url}/api/generate",
                json=self._build_request(prompt),
                timeout=(self.config.connect_timeout, self.config.generate_timeout)
            )
        except requests.RequestException as e:
            logger.error(f"Failed to communicate with Ollama: {e}")
            raise GenerationError(f"Failed to generate response: {e}") from e

        if response.status_code != 200:
            logger.error(f"Ollama API error: {response.status_code} - {response.text[:200]}")
            raise GenerationError(f"Ollama API returned status: {response.status_code}")

        return self._parse_response(response)

    def _build_request(self, prompt: str) -> dict:
        # Short prompts get a smaller token budget to accelerate generation
        if len(prompt) < self.config.short_prompt_chars:
            num_predict = self.config.short_prompt_tokens
        else:
            num_predict = self.config.long_prompt_tokens
        return {
            "model": self.config.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "top_p": self.config.top_p,
                "num_predict": num_predict,
                "num_ctx": self.config.context_window,
            }
        }

    @staticmethod
    def _parse_response(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Could not parse Ollama response: {response.text[:200]}")
            return MALFORMED_RESPONSE

        text = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(text, str) or not text:
            logger.warning(f"Ollama response has no text: {str(payload)[:200]}")
            return MALFORMED_RESPONSE
        return text

    def health_check(self) -> bool:
        """True when the Ollama API answers /api/tags with 200"""
        try:
            response = self.session.get(
                f"{self.config.base_url}/api/tags",
                timeout=self.config.health_timeout
            )
            return response.status_code == 200
        except requests.RequestException as e:
            logger.warning(f"Ollama health check failed: {e}")
            return False
