"""Pluggable LLM backend loader for the query extractor."""

from typing import Protocol, List, Dict, Optional
import logging
import os

import httpx

logger = logging.getLogger(__name__)


class LLMBackend(Protocol):
    def generate(
        self,
        messages: List[Dict],
        max_tokens: int,
        temperature: float,
        stop: Optional[list] = None,
    ) -> str:
        ...


class GeminiBackend:
    def __init__(
        self,
        api_key: str,
        model: str,
        endpoint: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30,
    ):
        self.api_key, self.model, self.endpoint, self.timeout = api_key, model, endpoint, timeout

    def generate(self, messages, max_tokens, temperature, stop=None) -> str:
        """Call the generateContent REST endpoint with the flattened conversation."""
        if not self.api_key:
            raise RuntimeError("Gemini API key not configured")
        prompt = "\n\n".join(message["content"] for message in messages)
        generation_config = {
            "temperature": temperature,
            "topK": 1,
            "topP": 1,
            "maxOutputTokens": max_tokens,
        }
        if stop:
            generation_config["stopSequences"] = stop
        response = httpx.post(
            f"{self.endpoint}/models/{self.model}:generateContent",
            params={"key": self.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": generation_config,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        # A reply without candidates is an empty completion, not a transport error.
        candidates = response.json().get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return ""
        return parts[0].get("text") or ""


class OpenAICompat:
    def __init__(self, endpoint: str, api_key: str, model: str, timeout: float = 60):
        self.endpoint, self.api_key, self.model, self.timeout = endpoint, api_key, model, timeout

    def generate(self, messages, max_tokens, temperature, stop=None) -> str:
        """Invoke any OpenAI-compatible /chat/completions endpoint."""
        if not self.endpoint or not self.api_key:
            raise RuntimeError("OpenAI-compatible not configured")
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if stop:
            payload["stop"] = stop
        headers = {"Authorization": f"Bearer {self.api_key}"}
        response = httpx.post(
            f"{self.endpoint}/chat/completions",
            json=payload,
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        choices = response.json().get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""


class OllamaBackend:
    def __init__(self, model: str, host: str = "http://localhost:11434", timeout: float = 60):
        self.model, self.host, self.timeout = model, host, timeout

    def generate(self, messages, max_tokens, temperature, stop=None) -> str:
        response = httpx.post(
            f"{self.host}/api/chat",
            json={
                "model": self.model,
                "messages": messages,
                "stream": False,
                "format": "json",
                "options": {
                    "temperature": temperature,
                    "num_predict": max_tokens,
                    "stop": stop or [],
                },
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["message"]["content"] or ""


class OfflineBackend:
    """Backend used in light mode: always answers with an empty completion."""

    def generate(self, messages, max_tokens, temperature, stop=None) -> str:
        return ""


def load_backend(cfg, light: bool = False) -> tuple[LLMBackend, str]:
    """Return the first configured backend defined by the strategy order."""
    if light:
        return OfflineBackend(), "offline"
    order = cfg.get("strategy_order", [])
    for name in order:
        try:
            if name == "gemini":
                entry = cfg["gemini"]
                api_key = os.getenv(entry.get("api_key_env") or "")
                if api_key:
                    backend = GeminiBackend(
                        api_key,
                        entry["model"],
                        entry.get("endpoint", "https://generativelanguage.googleapis.com/v1beta"),
                        entry.get("timeout", 30),
                    )
                    return backend, "gemini"
            elif name == "openai_compat":
                entry = cfg["openai_compat"]
                endpoint = os.getenv(entry.get("endpoint_env") or "")
                api_key = os.getenv(entry.get("api_key_env") or "")
                if endpoint and api_key:
                    backend = OpenAICompat(endpoint, api_key, entry["model"], entry.get("timeout", 60))
                    return backend, "openai_compat"
            elif name == "ollama":
                entry = cfg["ollama"]
                return OllamaBackend(entry["model"], entry["host"], entry.get("timeout", 60)), "ollama"
            elif name == "offline":
                return OfflineBackend(), "offline"
        except (KeyError, TypeError) as exc:
            logger.warning("Skipping misconfigured LLM backend %s: %s", name, exc)
            continue
    raise RuntimeError("No LLM backend available")
