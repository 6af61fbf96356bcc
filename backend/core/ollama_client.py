"""
Ollama API client wrapper.
"""
import httpx
from typing import List, Optional
from core.config import (
    OLLAMA_BASE_URL,
    OLLAMA_GENERATION_MODEL,
    OLLAMA_EMBED_MODEL,
    OLLAMA_TIMEOUT_SEC,
    LLM_TEMPERATURE,
    LLM_MAX_TOKENS,
)


class OllamaError(Exception):
    """Raised when the Ollama API cannot serve a request."""
    pass


class OllamaClient:
    """Client for interacting with Ollama models."""

    def __init__(self, base_url: str = OLLAMA_BASE_URL, timeout: float = OLLAMA_TIMEOUT_SEC):
        self.base_url = base_url
        self.client = httpx.Client(timeout=timeout)

    def generate(
        self,
        prompt: str,
        model: str = OLLAMA_GENERATION_MODEL,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
        json_mode: bool = False,
    ) -> str:
        """
        Run a single non-streaming completion.

        Args:
            prompt: Full prompt text
            model: Ollama model tag
            temperature: Sampling temperature
            max_tokens: Upper bound on generated tokens
            json_mode: Ask Ollama to constrain the output to JSON

        Returns:
            The generated text
        """
        url = f"{self.base_url}/api/generate"
        payload = {
            "model": model,
            "prompt": prompt,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
            "stream": False,
        }
        if json_mode:
            payload["format"] = "json"

        try:
            response = self.client.post(url, json=payload)
            response.raise_for_status()
            result = response.json()
            return result.get("response", "")
        except (httpx.HTTPError, ValueError) as e:
            raise OllamaError(f"Ollama API error: {str(e)}")

    def generate_embedding(self, text: str, model: Optional[str] = None) -> List[float]:
        """Generate embedding vector for text."""
        url = f"{self.base_url}/api/embeddings"
        payload = {
            "model": model or OLLAMA_EMBED_MODEL,
            "prompt": text,
        }

        try:
            response = self.client.post(url, json=payload)
            response.raise_for_status()
            embedding = response.json().get("embedding", [])
        except (httpx.HTTPError, ValueError) as e:
            raise OllamaError(f"Ollama embedding error: {str(e)}")

        if not embedding:
            raise OllamaError("Ollama returned an empty embedding")
        return embedding


# Global Ollama client instance
ollama = OllamaClient()
