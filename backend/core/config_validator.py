"""
Configuration validation for the StudyPath backend.
Validates settings, directories, prompt files and the Ollama service on startup.
"""
import requests
from typing import List, Dict, Any


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""
    pass


class ConfigValidator:
    """Validates system configuration before serving requests."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self) -> Dict[str, Any]:
        """
        Run all validation checks.

        Returns:
            {
                "valid": bool,
                "errors": List[str],
                "warnings": List[str]
            }
        """
        self.errors = []
        self.warnings = []

        self._validate_config_values()
        self._validate_directories()
        self._validate_prompt_files()
        self._validate_ollama()

        return {
            "valid": len(self.errors) == 0,
            "errors": self.errors,
            "warnings": self.warnings
        }

    def _validate_config_values(self):
        """Validate configuration value ranges."""
        from core.config import (
            CANDIDATE_TIMEOUT_SEC,
            LLM_TEMPERATURE,
            MATCH_CANDIDATE_COUNT,
            MATCH_FALLBACK_CONFIDENCE,
            MAX_UPLOAD_BYTES,
            MAX_VIDEOS_PER_SECTION,
            MIN_EXTRACTED_CHARS,
            TRANSCRIPT_CHAR_LIMIT,
        )
        from models.resource_models import RankingWeights

        weights_total = RankingWeights().total
        if abs(weights_total - 1.0) > 1e-6:
            self.errors.append(
                f"Ranking weights must sum to 1.0 (got {weights_total:.3f})"
            )

        if MAX_UPLOAD_BYTES <= 0:
            self.errors.append(f"MAX_UPLOAD_BYTES ({MAX_UPLOAD_BYTES}) must be positive")

        if MIN_EXTRACTED_CHARS < 0:
            self.errors.append(f"MIN_EXTRACTED_CHARS ({MIN_EXTRACTED_CHARS}) must not be negative")

        if not (1 <= MATCH_CANDIDATE_COUNT <= 5):
            self.errors.append(
                f"MATCH_CANDIDATE_COUNT ({MATCH_CANDIDATE_COUNT}) must be between 1 and 5"
            )

        if not (1 <= MAX_VIDEOS_PER_SECTION <= 5):
            self.errors.append(
                f"MAX_VIDEOS_PER_SECTION ({MAX_VIDEOS_PER_SECTION}) must be between 1 and 5"
            )

        if not (0 <= MATCH_FALLBACK_CONFIDENCE <= 100):
            self.errors.append(
                f"MATCH_FALLBACK_CONFIDENCE ({MATCH_FALLBACK_CONFIDENCE}) must be between 0 and 100"
            )

        if TRANSCRIPT_CHAR_LIMIT <= 0:
            self.errors.append(f"TRANSCRIPT_CHAR_LIMIT ({TRANSCRIPT_CHAR_LIMIT}) must be positive")

        if CANDIDATE_TIMEOUT_SEC <= 0:
            self.errors.append(f"CANDIDATE_TIMEOUT_SEC ({CANDIDATE_TIMEOUT_SEC}) must be positive")

        if not (0.0 <= LLM_TEMPERATURE <= 1.0):
            self.warnings.append(
                f"LLM_TEMPERATURE ({LLM_TEMPERATURE}) outside normal range [0.0, 1.0]"
            )

    def _validate_directories(self):
        """Check that required directories exist."""
        from core.config import DATA_DIR

        if not DATA_DIR.exists():
            self.errors.append(f"Data directory not found at {DATA_DIR}.")

    def _validate_prompt_files(self):
        """Check prompt overrides; built-in templates cover missing files."""
        from core.config import PROMPTS_DIR
        from core.prompt_manager import PROMPT_NAMES

        if not PROMPTS_DIR.exists():
            self.warnings.append(
                f"Prompts directory not found: {PROMPTS_DIR}. Using built-in templates."
            )
            return

        for name in PROMPT_NAMES:
            path = PROMPTS_DIR / f"{name}.txt"
            if not path.exists():
                self.warnings.append(f"Prompt file missing: {name}.txt. Using built-in template.")
            elif path.stat().st_size == 0:
                self.warnings.append(f"Prompt file is empty: {name}.txt")

    def _validate_ollama(self):
        """Check that Ollama is reachable and the models are pulled."""
        from core.config import (
            OLLAMA_BASE_URL,
            OLLAMA_GENERATION_MODEL,
            OLLAMA_EMBED_MODEL,
        )

        try:
            response = requests.get(f"{OLLAMA_BASE_URL}/api/tags", timeout=5)
            response.raise_for_status()
        except requests.exceptions.ConnectionError:
            self.warnings.append(
                f"Cannot connect to Ollama at {OLLAMA_BASE_URL}. "
                "Matching will fall back to metadata. Start it with: `ollama serve`"
            )
            return
        except requests.exceptions.RequestException as e:
            self.warnings.append(f"Ollama connection error: {e}")
            return

        try:
            available_models = [model["name"] for model in response.json().get("models", [])]
        except (ValueError, KeyError, TypeError) as e:
            self.warnings.append(f"Unexpected Ollama model listing: {e}")
            return

        required_models = {
            "Text generation": OLLAMA_GENERATION_MODEL,
            "Embeddings": OLLAMA_EMBED_MODEL,
        }
        for model_name, model_id in required_models.items():
            if model_id not in available_models:
                self.warnings.append(
                    f"Model not found: {model_name} ({model_id}). "
                    f"Pull it with: `ollama pull {model_id}`"
                )


# Global validator instance
config_validator = ConfigValidator()
