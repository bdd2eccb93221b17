"""Seeded random protein and DNA sequences."""

import random

_AMINO_ACIDS = "ACDEFGHIJLMNPQRSTVWY"
_NUCLEIC_ACIDS = "ACTG"


def protein_sequence(length: int, seed: int) -> str:
    """Return a random protein of the given length, starting with M and ending with *."""
    if length <= 2:
        raise ValueError(
            "length must be greater than two: a random protein always holds "
            "a start and a stop codon"
        )
    rng = random.Random(seed)
    middle = "".join(rng.choice(_AMINO_ACIDS) for _ in range(length - 2))
    return "M" + middle + "*"


def dna_sequence(length: int, seed: int) -> str:
    """Return a random DNA sequence of the given length."""
    if length < 0:
        raise ValueError("length must not be negative")
    rng = random.Random(seed)
    return "".join(rng.choice(_NUCLEIC_ACIDS) for _ in range(length))