"""Checksum segments for encrypted URLs.

An encrypted URL keeps the segment count of the URL it replaces, so a
browser resolving ``../style.css`` against it climbs the same number of
levels. The filler segments come from a generator seeded with the
ciphertext: the decoder rebuilds the same sequence and can tell an
untouched filler segment from one the browser replaced.

Usage::

    gen = SegmentChecksumGenerator.seeded(ciphertext)
    fillers = [next(gen) for _ in range(3)]
"""

from __future__ import annotations

from dataclasses import dataclass

_MASK = 0xFFFFFFFF


def hash_string(value: str) -> int:
    """Polynomial string hash, kept to 32 bits."""
    h = 97
    for char in value:
        h = (47 * h + ord(char)) & _MASK
    return h


@dataclass(slots=True)
class SegmentChecksumGenerator:
    """Infinite, deterministic generator of 5-character segments.

    Each segment is three characters picked from ``alphabet`` plus a
    two-digit hex checksum of those characters. The cursor is reset to
    the hash of every emitted segment, so each value depends on all the
    values before it. The output is a pure function of the seed and the
    number of calls.

    Build one per encode/decode call; instances are not shared.
    """

    alphabet: str
    cursor: int

    @classmethod
    def seeded(cls, seed: str) -> SegmentChecksumGenerator:
        if not seed:
            msg = "SegmentChecksumGenerator needs a non-empty seed."
            raise ValueError(msg)
        return cls(alphabet=seed, cursor=hash_string(seed))

    def __iter__(self) -> SegmentChecksumGenerator:
        return self

    def __next__(self) -> str:
        chars = self.alphabet
        a = chars[self.cursor % len(chars)]
        self.cursor += 1
        b = chars[self.cursor % len(chars)]
        self.cursor += 1
        c = chars[self.cursor % len(chars)]

        segment = a + b + c
        segment += f"{hash_string(segment) % 256:02x}"
        self.cursor = hash_string(segment)
        return segment
