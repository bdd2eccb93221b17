"""Expansion of IUPAC ambiguity codes into concrete sequences."""

from itertools import product

_IUPAC = {
    "G": "G",
    "A": "A",
    "T": "T",
    "C": "C",
    "R": "GA",
    "Y": "TC",
    "M": "AC",
    "K": "GT",
    "S": "GC",
    "W": "AT",
    "H": "ACT",
    "B": "GTC",
    "V": "GCA",
    "D": "GAT",
    "N": "GATC",
}


def all_variants_iupac(seq: str) -> list[str]:
    """Return every concrete sequence matched by an IUPAC nucleotide string."""
    choices = []
    for base in seq.upper():
        try:
            choices.append(_IUPAC[base])
        except KeyError:
            raise ValueError(f"{base} is not a supported IUPAC character") from None
    return ["".join(variant) for variant in product(*choices)]