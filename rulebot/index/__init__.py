"""Rule similarity index."""

from rulebot.index.fingerprint import cosine_similarity, fingerprint, tokenize
from rulebot.index.similarity import SimilarityIndex

__all__ = ["SimilarityIndex", "cosine_similarity", "fingerprint", "tokenize"]
