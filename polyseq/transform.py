"""Basic sequence transformations: complement, reverse and reverse complement."""

_COMPLEMENT_BASES = {
    "A": "T",
    "B": "V",
    "C": "G",
    "D": "H",
    "G": "C",
    "H": "D",
    "K": "M",
    "M": "K",
    "N": "N",
    "R": "Y",
    "S": "S",
    "T": "A",
    "U": "A",
    "V": "B",
    "W": "W",
    "Y": "R",
    "a": "t",
    "b": "v",
    "c": "g",
    "d": "h",
    "g": "c",
    "h": "d",
    "k": "m",
    "m": "k",
    "n": "n",
    "r": "y",
    "s": "s",
    "t": "a",
    "u": "a",
    "v": "b",
    "w": "w",
    "y": "r",
}

_UNKNOWN_BASE = "\x00"


def complement_base(base: str) -> str:
    """Return the complement of a single base; unknown bases map to NUL."""
    return _COMPLEMENT_BASES.get(base, _UNKNOWN_BASE)


def complement(sequence: str) -> str:
    """Return the complement of a sequence."""
    return "".join(complement_base(base) for base in sequence)


def reverse(sequence: str) -> str:
    """Return the reverse of a sequence."""
    return sequence[::-1]


def reverse_complement(sequence: str) -> str:
    """Return the reverse complement of a sequence."""
    return reverse(complement(sequence))