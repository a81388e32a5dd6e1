"""
Client for interacting with an Ollama LLM server.

This client wraps HTTP requests to the Ollama REST API. It supports
making text generation requests via the `/api/generate` endpoint.
Failures are classified before they reach the caller: a missing model
raises :class:`ModelNotFoundError`, everything else (HTTP errors,
timeouts, malformed payloads) raises :class:`LLMError`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

import requests


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream. Messages will still propagate to the root logger if configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_BASE_URL = "http://localhost"
DEFAULT_PORT = 11434


class LLMError(Exception):
    """Raised when communication with the LLM server fails."""

    pass


class ModelNotFoundError(LLMError):
    """Raised when the server does not have the requested model."""

    def __init__(self, model: str, detail: str = "") -> None:
        self.model = model
        self.detail = detail
        super().__init__(detail or f"model '{model}' not found")


def resolve_service_address(raw_url: Optional[str]) -> Tuple[str, int]:
    """Turn an ``OLLAMA_URL`` style value into a ``(base_url, port)`` pair.

    Only the scheme, host and port are kept. Anything that does not parse
    to a scheme and a host, or that carries an invalid port, falls back to
    the local default rather than failing.

    >>> resolve_service_address("http://gpu-box:8080/ignored")
    ('http://gpu-box', 8080)
    >>> resolve_service_address("not a url")
    ('http://localhost', 11434)
    """
    if not raw_url:
        return DEFAULT_BASE_URL, DEFAULT_PORT
    try:
        parsed = urlparse(raw_url.strip())
        port = parsed.port
    except ValueError as exc:
        logger.debug("Ignoring malformed Ollama URL %r: %s", raw_url, exc)
        return DEFAULT_BASE_URL, DEFAULT_PORT
    if not parsed.scheme or not parsed.hostname:
        logger.debug("Ignoring malformed Ollama URL %r", raw_url)
        return DEFAULT_BASE_URL, DEFAULT_PORT
    host = parsed.hostname
    if ":" in host:
        # IPv6 literal
        host = f"[{host}]"
    return f"{parsed.scheme}://{host}", port if port is not None else DEFAULT_PORT


def _error_detail(response: requests.Response) -> str:
    """Extract the ``error`` field from an Ollama error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return response.text


def _is_model_missing(status_code: int, detail: str) -> bool:
    lowered = detail.lower()
    if "model" in lowered and "not found" in lowered:
        return True
    # Ollama answers 404 on /api/generate only for unknown models.
    return status_code == 404


@dataclass
class OllamaClient:
    """Client for interacting with an Ollama server.

    Parameters
    ----------
    base_url : str
        Base URL of the Ollama server, e.g. ``"http://localhost"``.
    port : int
        Port number of the Ollama server, e.g. ``11434``.
    model : str
        Name of the model to use for generation, e.g. ``"gemma3:latest"``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 120 seconds.
    """

    base_url: str
    port: int
    model: str
    request_timeout: float = 120.0

    def _endpoint(self) -> str:
        return f"{self.base_url}:{self.port}/api/generate"

    def generate(self, prompt: str) -> str:
        """Generate a completion from the model.

        Parameters
        ----------
        prompt : str
            The prompt to send to the model.

        Returns
        -------
        str
            The generated response text, exactly as returned by the server.

        Raises
        ------
        ModelNotFoundError
            If the server does not have ``self.model``.
        LLMError
            If the request fails for any other reason.
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }
        url = self._endpoint()
        logger.debug("Sending request to LLM at %s with payload: %s", url, payload)
        try:
            response = requests.post(
                url,
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to connect to LLM: %s", exc)
            raise LLMError(str(exc)) from exc
        if response.status_code != 200:
            detail = _error_detail(response)
            if _is_model_missing(response.status_code, detail):
                logger.info("Model %s is not available on the server", self.model)
                raise ModelNotFoundError(self.model, detail)
            logger.error(
                "LLM returned non-200 status %s: %s", response.status_code, detail
            )
            raise LLMError(f"LLM returned status {response.status_code}: {detail}")
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Failed to parse LLM response: %s", exc)
            raise LLMError("Failed to parse LLM response") from exc
        if not isinstance(data, dict):
            raise LLMError("Unexpected response structure from LLM")
        if "error" in data:
            detail = str(data["error"])
            if _is_model_missing(response.status_code, detail):
                raise ModelNotFoundError(self.model, detail)
            raise LLMError(detail)
        if isinstance(data.get("response"), str):
            return data["response"]
        raise LLMError("Unexpected response structure from LLM")
