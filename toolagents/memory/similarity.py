from __future__ import annotations

import re
import zlib
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np


TOKEN_PATTERN = re.compile(r"\w+")


def tokenize(text: str) -> List[str]:
    return TOKEN_PATTERN.findall(text.lower())


class SimilarityScorer(ABC):
    """
    Pluggable relevance backend for `semantic` queries.

    The knowledge store never hardcodes a similarity algorithm; it
    hands the query and candidate texts to a scorer and ranks by the
    returned scores. Implementations backed by a real embedding model
    only need to honour this contract.
    """

    @abstractmethod
    def score(self, query: str, texts: Sequence[str]) -> List[float]:
        """
        Return one relevance score per text, higher is closer.

        Scores <= 0 mean "not relevant" and are dropped by the store.
        """
        raise NotImplementedError


class HashingVectorScorer(SimilarityScorer):
    """
    Embedding-free default: hashed term-frequency vectors compared by
    cosine similarity.

    Tokens are hashed (crc32, stable across processes) into a fixed
    number of buckets, so no vocabulary has to be maintained.
    """

    def __init__(self, dimensions: int = 512) -> None:
        if dimensions <= 0:
            raise ValueError("dimensions must be positive")
        self._dimensions = dimensions

    def _embed(self, text: str) -> np.ndarray:
        vector = np.zeros(self._dimensions, dtype=np.float64)
        for token in tokenize(text):
            vector[zlib.crc32(token.encode("utf-8")) % self._dimensions] += 1.0
        return vector

    def score(self, query: str, texts: Sequence[str]) -> List[float]:
        if not texts:
            return []

        query_vec = self._embed(query)
        query_norm = np.linalg.norm(query_vec)
        if query_norm == 0:
            return [0.0] * len(texts)

        matrix = np.vstack([self._embed(text) for text in texts])
        norms = np.linalg.norm(matrix, axis=1)
        dots = matrix @ query_vec

        with np.errstate(divide="ignore", invalid="ignore"):
            scores = np.where(norms > 0, dots / (norms * query_norm), 0.0)

        return [float(s) for s in scores]
