"""Deterministic hash-derived embeddings used when the provider fails."""

import hashlib


def fallback_embedding(text: str, dim: int = 768) -> list[float]:
    """Build a pseudo-embedding from repeated SHA-256 digests.

    Hashes ``text + "|" + counter`` for counter = 0, 1, ... and maps each
    digest byte b to (b / 255) * 2 - 1 until ``dim`` values are filled.
    Same text and dimension always give the same vector.
    """
    if dim <= 0:
        raise ValueError("dim must be > 0")

    values: list[float] = []
    counter = 0
    while len(values) < dim:
        digest = hashlib.sha256(f"{text}|{counter}".encode("utf-8")).digest()
        for byte in digest[: dim - len(values)]:
            values.append((byte / 255.0) * 2 - 1)
        counter += 1
    return values
