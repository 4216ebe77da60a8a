"""In-memory similarity index over rules."""

from typing import Iterable

import numpy as np
from loguru import logger

from rulebot.index.fingerprint import (
    DEFAULT_DIMENSIONS,
    MIN_TOKEN_LENGTH,
    cosine_similarity,
    fingerprint,
)
from rulebot.types import Rule, VectorSearchResult


class SimilarityIndex:
    """
    Holds rules and their fingerprints and answers nearest-neighbour queries.

    Rules keep their insertion order; re-adding a rule whose id is already
    indexed replaces it in place (same slot, new content and fingerprint).
    """

    def __init__(self, dimensions: int = DEFAULT_DIMENSIONS, min_token_length: int = MIN_TOKEN_LENGTH):
        self.dimensions = dimensions
        self.min_token_length = min_token_length
        self._rules: dict[str, Rule] = {}
        self._vectors: dict[str, np.ndarray] = {}

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def add_rules(self, rules: Iterable[Rule]) -> int:
        """
        Index ``rules``. Returns how many were new (not replacements).

        A fingerprint is attached only to rules that have none. Rules carrying
        a fingerprint of another width are skipped with a warning.
        """
        added = 0
        replaced = 0
        for rule in rules:
            if rule.fingerprint is None:
                rule.fingerprint = self._fingerprint(rule.content).tolist()
            elif len(rule.fingerprint) != self.dimensions:
                logger.warning(
                    f"Skipping rule {rule.id}: fingerprint has {len(rule.fingerprint)} "
                    f"dimensions, index uses {self.dimensions}"
                )
                continue

            if rule.id in self._rules:
                replaced += 1
                if self._rules[rule.id].content != rule.content:
                    logger.debug(f"Rule {rule.id} updated in place")
            else:
                added += 1

            # dict assignment keeps the original slot for an existing key
            self._rules[rule.id] = rule
            self._vectors[rule.id] = np.asarray(rule.fingerprint, dtype=np.float64)

        logger.info(f"Indexed {added} new rules ({replaced} updated), {len(self._rules)} total")
        return added

    def search(self, query: str, limit: int = 5) -> list[VectorSearchResult]:
        """Return up to ``limit`` rules ranked by cosine similarity to ``query``.

        Results are sorted by non-increasing similarity; ties keep insertion
        order. An empty index yields an empty list.
        """
        if not self._rules or limit <= 0:
            return []

        query_vector = self._fingerprint(query)
        results = [
            VectorSearchResult(rule=rule, similarity=cosine_similarity(query_vector, self._vectors[rule_id]))
            for rule_id, rule in self._rules.items()
        ]
        # sorted() is stable, also with reverse=True
        results = sorted(results, key=lambda r: r.similarity, reverse=True)
        return results[:limit]

    def get_all_rules(self) -> list[Rule]:
        return list(self._rules.values())

    def get_rule(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def remove_rule(self, rule_id: str) -> bool:
        """Drop a rule by id. Unknown ids are ignored."""
        if rule_id not in self._rules:
            return False
        del self._rules[rule_id]
        del self._vectors[rule_id]
        return True

    def clear(self) -> None:
        """Remove every rule and fingerprint."""
        count = len(self._rules)
        self._rules.clear()
        self._vectors.clear()
        logger.info(f"Cleared {count} rules from index")

    def _fingerprint(self, text: str) -> np.ndarray:
        return fingerprint(text, self.dimensions, self.min_token_length)
