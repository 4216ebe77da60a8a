"""Tests for tokenization, hashed fingerprints and cosine similarity."""

import numpy as np
import pytest

from rulebot.index.fingerprint import (
    bucket_for,
    cosine_similarity,
    fingerprint,
    string_hash,
    tokenize,
)


def test_tokenize_lowercases_and_drops_short_tokens():
    assert tokenize("I have a Meeting at 10am") == ["have", "meeting", "10am"]


def test_tokenize_splits_on_punctuation():
    assert tokenize("check-in, re-check; verify!") == ["check", "check", "verify"]


def test_string_hash_is_deterministic_rolling_hash():
    # h = h*31 + c, same value as the classic 32-bit string hash
    assert string_hash("abc") == 96354
    assert string_hash("") == 0
    assert bucket_for("abc") == 54


def test_string_hash_wraps_to_signed_32_bit():
    value = string_hash("a" * 50)
    assert 0 <= value <= 2**31


def test_fingerprint_is_unit_length():
    vec = fingerprint("Reschedule meetings that overlap with appointments")
    assert vec.shape == (100,)
    assert abs(np.linalg.norm(vec) - 1.0) < 1e-9
    assert (vec >= 0).all()


@pytest.mark.parametrize("text", ["", "a an to", "   ", "!!"])
def test_fingerprint_of_untokenizable_text_is_zero(text):
    vec = fingerprint(text)
    assert not vec.any()


def test_fingerprint_ignores_word_order():
    assert np.allclose(fingerprint("gym before work"), fingerprint("work before gym"))


def test_fingerprint_respects_dimensions():
    assert fingerprint("hello world", dimensions=16).shape == (16,)


def test_cosine_similarity_identical():
    vec = fingerprint("check the schedule before accepting")
    assert abs(cosine_similarity(vec, vec) - 1.0) < 1e-9


def test_cosine_similarity_orthogonal():
    assert abs(cosine_similarity([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])) < 1e-9


def test_cosine_similarity_opposite():
    assert abs(cosine_similarity([1.0, 0.0], [-1.0, 0.0]) + 1.0) < 1e-9


def test_cosine_similarity_zero_vector_is_zero():
    assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0
    assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0


def test_shared_vocabulary_scores_higher_than_unrelated_text():
    query = fingerprint("meeting schedule conflict")
    related = fingerprint("conflict in the meeting schedule")
    unrelated = fingerprint("drink water after running")
    assert cosine_similarity(query, related) > cosine_similarity(query, unrelated)
