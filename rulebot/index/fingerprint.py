"""Hashed bag-of-words fingerprints and cosine similarity.

A fingerprint is not a learned embedding: every token of length > 2 is hashed
into one of ``dimensions`` buckets, each occurrence adds ``1/sqrt(n_tokens)``
and the vector is L2-normalized. Overlapping vocabulary gives higher cosine.
"""

import re
from typing import Sequence

import numpy as np

DEFAULT_DIMENSIONS = 100
MIN_TOKEN_LENGTH = 3

_TOKEN_PATTERN = re.compile(r"\w+")


def tokenize(text: str, min_length: int = MIN_TOKEN_LENGTH) -> list[str]:
    """Lowercase word tokens of at least ``min_length`` characters."""
    return [t for t in _TOKEN_PATTERN.findall(text.lower()) if len(t) >= min_length]


def string_hash(token: str) -> int:
    """Deterministic 32-bit rolling hash (``h*31 + c``), absolute value.

    The builtin ``hash()`` is salted per process and cannot be used here.
    """
    h = 0
    for ch in token:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def bucket_for(token: str, dimensions: int = DEFAULT_DIMENSIONS) -> int:
    return string_hash(token) % dimensions


def fingerprint(
    text: str,
    dimensions: int = DEFAULT_DIMENSIONS,
    min_length: int = MIN_TOKEN_LENGTH,
) -> np.ndarray:
    """Compute the normalized fingerprint of ``text``.

    Returns an all-zero vector when the text has no usable tokens.
    """
    vector = np.zeros(dimensions, dtype=np.float64)
    tokens = tokenize(text or "", min_length)
    if not tokens:
        return vector

    weight = 1.0 / np.sqrt(len(tokens))
    buckets = [bucket_for(t, dimensions) for t in tokens]
    np.add.at(vector, buckets, weight)

    norm = np.linalg.norm(vector)
    if norm > 0:
        vector /= norm
    return vector


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Cosine of the angle between ``a`` and ``b``; 0.0 if either is all zeros."""
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a_arr, b_arr) / (norm_a * norm_b))
