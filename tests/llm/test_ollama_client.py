import json
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import requests

from commit_generator.llm.ollama_client import LLMError, ModelNotFoundError, OllamaClient


class DummyResponse(SimpleNamespace):
    def json(self):
        return json.loads(self.text)


class TestOllamaClient(unittest.TestCase):
    def test_generate_success(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=json.dumps({"response": "feat: add avatar"}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "gemma3:latest")
            self.assertEqual(client.generate("prompt"), "feat: add avatar")

    def test_generate_returns_text_untrimmed(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=json.dumps({"response": "  fix: typo\n"}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            self.assertEqual(client.generate("prompt"), "  fix: typo\n")

    def test_generate_sends_model_and_prompt(self) -> None:
        calls = []

        def fake_post(url, *_args, **kwargs):
            calls.append((url, kwargs))
            return DummyResponse(status_code=200, text=json.dumps({"response": "ok"}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://gpu-box", 8080, "qwen3:8b", request_timeout=5)
            client.generate("the prompt")

        url, kwargs = calls[0]
        self.assertEqual(url, "http://gpu-box:8080/api/generate")
        self.assertEqual(
            kwargs["json"], {"model": "qwen3:8b", "prompt": "the prompt", "stream": False}
        )
        self.assertEqual(kwargs["timeout"], 5)

    def test_generate_model_not_found(self) -> None:
        def fake_post(url, *_args, **kwargs):
            body = {"error": "model \"gemma3:latest\" not found, try pulling it first"}
            return DummyResponse(status_code=404, text=json.dumps(body))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "gemma3:latest")
            with self.assertRaises(ModelNotFoundError) as ctx:
                client.generate("prompt")
        self.assertEqual(ctx.exception.model, "gemma3:latest")
        self.assertIn("not found", str(ctx.exception))

    def test_model_not_found_is_an_llm_error(self) -> None:
        self.assertTrue(issubclass(ModelNotFoundError, LLMError))

    def test_generate_404_without_body(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=404, text="404 page not found")

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(ModelNotFoundError):
                client.generate("prompt")

    def test_generate_error_status(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=500, text="Internal error")

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError) as ctx:
                client.generate("prompt")
        self.assertNotIsInstance(ctx.exception, ModelNotFoundError)
        self.assertIn("Internal error", str(ctx.exception))

    def test_generate_error_status_uses_error_field(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=500, text=json.dumps({"error": "out of memory"}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError) as ctx:
                client.generate("prompt")
        self.assertIn("out of memory", str(ctx.exception))

    def test_generate_connection_error(self) -> None:
        def fake_post(url, *_args, **kwargs):
            raise requests.ConnectionError("connection refused")

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError) as ctx:
                client.generate("prompt")
        self.assertIn("connection refused", str(ctx.exception))

    def test_generate_timeout(self) -> None:
        def fake_post(url, *_args, **kwargs):
            raise requests.Timeout("read timed out")

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError):
                client.generate("prompt")

    def test_generate_invalid_json(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text="not json")

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError):
                client.generate("prompt")

    def test_generate_unexpected_structure(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=json.dumps({"done": True}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "m")
            with self.assertRaises(LLMError):
                client.generate("prompt")

    def test_generate_error_field_on_200(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=json.dumps({"error": "model 'x' not found"}))

        with patch("requests.post", fake_post):
            client = OllamaClient("http://localhost", 11434, "x")
            with self.assertRaises(ModelNotFoundError):
                client.generate("prompt")


if __name__ == "__main__":
    unittest.main()
