"""
Shared utilities for processing pipeline.
"""
import json
import math
import re
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np


def calculate_cosine_similarity(
    vec1: Union[np.ndarray, Sequence[float]],
    vec2: Union[np.ndarray, Sequence[float]],
) -> float:
    """Calculate cosine similarity between two vectors."""
    vec1 = np.asarray(vec1, dtype=np.float32)
    vec2 = np.asarray(vec2, dtype=np.float32)

    if vec1.size == 0 or vec2.size == 0 or vec1.shape != vec2.shape:
        return 0.0

    dot_product = np.dot(vec1, vec2)
    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    return float(dot_product / (norm1 * norm2))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    return max(lower, min(value, upper))


def capitalize(word: str) -> str:
    """Upper-case the first character only ("python" -> "Python")."""
    return word[:1].upper() + word[1:]


def format_duration(seconds: Optional[float]) -> Optional[str]:
    """Convert seconds to ``H:MM:SS`` (or ``M:SS`` under an hour)."""
    if seconds is None:
        return None
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_json_object(llm_response: str) -> Dict[str, Any]:
    """
    Extract the first JSON object from an LLM response.

    Raises:
        ValueError: if the response contains no parseable JSON object.
    """
    json_match = re.search(r'\{.*\}', llm_response or "", re.DOTALL)
    if not json_match:
        raise ValueError("No JSON object found in model response")

    try:
        data = json.loads(json_match.group(0))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in model response: {e}")

    if not isinstance(data, dict):
        raise ValueError("Model response JSON is not an object")
    return data
