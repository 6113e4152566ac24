"""Deterministic offline embedders.

Vectors are seeded from a SHA-256 digest of the input, so equal inputs give
equal unit vectors. Useful for local development and tests; the geometry is
meaningless beyond identity.
"""

import hashlib

import numpy as np

from cardvault.embedding.base import BaseImageEmbedder, BaseTextEmbedder


def hashed_vector(data: bytes, dimensions: int) -> list[float]:
    seed = int.from_bytes(hashlib.sha256(data).digest()[:8], "big")
    vector = np.random.default_rng(seed).standard_normal(dimensions)
    return (vector / np.linalg.norm(vector)).tolist()


class HashingTextEmbedder(BaseTextEmbedder):
    def __init__(self, dimensions: int) -> None:
        self.dimensions = dimensions

    def embed_text(self, text: str) -> list[float]:
        return hashed_vector(text.encode("utf-8"), self.dimensions)


class HashingImageEmbedder(BaseImageEmbedder):
    def __init__(self, dimensions: int) -> None:
        self.dimensions = dimensions

    def embed_image(self, image_bytes: bytes) -> list[float]:
        return hashed_vector(image_bytes, self.dimensions)

    def embed_query_text(self, text: str) -> list[float]:
        return hashed_vector(text.encode("utf-8"), self.dimensions)
