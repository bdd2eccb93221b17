"""Primer melting temperatures and De Bruijn based barcode design."""

import math
from collections.abc import Callable, Iterable

from .transform import reverse_complement

# Enthalpy (dH, kcal/mol) and entropy (dS, cal/mol-K) for nearest-neighbour pairs.
_NEAREST_NEIGHBORS = {
    "AA": (-7.6, -21.3),
    "TT": (-7.6, -21.3),
    "AT": (-7.2, -20.4),
    "TA": (-7.2, -21.3),
    "CA": (-8.5, -22.7),
    "TG": (-8.5, -22.7),
    "GT": (-8.4, -22.4),
    "AC": (-8.4, -22.4),
    "CT": (-7.8, -21.0),
    "AG": (-7.8, -21.0),
    "GA": (-8.2, -22.2),
    "TC": (-8.2, -22.2),
    "CG": (-10.6, -27.2),
    "GC": (-9.8, -24.4),
    "GG": (-8.0, -19.9),
    "CC": (-8.0, -19.9),
}

_INITIAL_PENALTY = (0.2, -5.7)
_SYMMETRY_PENALTY = (0.0, -1.4)
_TERMINAL_AT_PENALTY = (2.2, 6.9)

_GAS_CONSTANT = 1.9872  # cal / mol - K


def santa_lucia(
    sequence: str,
    primer_concentration: float,
    salt_concentration: float,
    magnesium_concentration: float,
) -> tuple[float, float, float]:
    """Return (melting temperature, dH, dS) by the nearest-neighbour method."""
    sequence = sequence.upper()
    if not sequence:
        raise ValueError("sequence must not be empty")

    dh, ds = _INITIAL_PENALTY
    if sequence == reverse_complement(sequence):
        dh += _SYMMETRY_PENALTY[0]
        ds += _SYMMETRY_PENALTY[1]
        symmetry_factor = 1.0
    else:
        symmetry_factor = 4.0

    if sequence[-1] in "AT":
        dh += _TERMINAL_AT_PENALTY[0]
        ds += _TERMINAL_AT_PENALTY[1]

    salt_effect = salt_concentration + magnesium_concentration * 140
    ds += 0.368 * (len(sequence) - 1) * math.log(salt_effect)

    for first, second in zip(sequence, sequence[1:]):
        pair_h, pair_s = _NEAREST_NEIGHBORS.get(first + second, (0.0, 0.0))
        dh += pair_h
        ds += pair_s

    melting = dh * 1000 / (ds + _GAS_CONSTANT * math.log(primer_concentration / symmetry_factor)) - 273.15
    return melting, dh, ds


def marmur_doty(sequence: str) -> float:
    """Return the melting temperature of a very short sequence (<15 bp)."""
    sequence = sequence.upper()
    at = sequence.count("A") + sequence.count("T")
    gc = sequence.count("C") + sequence.count("G")
    return 2.0 * at + 4.0 * gc - 7.0


def melting_temp(sequence: str) -> float:
    """Return the SantaLucia melting temperature with default conditions."""
    primer_concentration = 500e-9
    salt_concentration = 50e-3
    magnesium_concentration = 0.0
    melting, _, _ = santa_lucia(sequence, primer_concentration, salt_concentration, magnesium_concentration)
    return melting


def nucleobase_de_bruijn_sequence(substring_length: int) -> str:
    """Return a De Bruijn sequence over ATGC with every substring of the given length once."""
    if substring_length < 1:
        raise ValueError("substring_length must be at least 1")
    alphabet = "ATGC"
    k = len(alphabet)
    n = substring_length
    a = [0] * (k * n)
    seq: list[int] = []

    def construct(t: int, p: int) -> None:
        if t > n:
            if n % p == 0:
                seq.extend(a[1 : p + 1])
        else:
            a[t] = a[t - p]
            construct(t + 1, p)
            for j in range(a[t - p] + 1, k):
                a[t] = j
                construct(t + 1, t)

    construct(1, 1)
    result = "".join(alphabet[i] for i in seq)
    return result + result[: n - 1]


def create_barcodes_with_banned_sequences(
    length: int,
    max_sub_sequence: int,
    banned_sequences: Iterable[str] = (),
    banned_functions: Iterable[Callable[[str], bool]] = (),
) -> list[str]:
    """Return barcodes cut from a De Bruijn sequence, avoiding banned content.

    A barcode is skipped forward while it contains a banned sequence (or its
    reverse complement), or while any of ``banned_functions`` returns False for it.
    """
    banned_sequences = list(banned_sequences)
    banned_functions = list(banned_functions)
    debruijn = nucleobase_de_bruijn_sequence(max_sub_sequence)
    total = len(debruijn)
    step = length - (max_sub_sequence - 1)
    barcodes: list[str] = []

    barcode_num = 0
    while barcode_num * step + length < total:
        start = barcode_num * step
        end = start + length
        barcode_num += 1
        for banned in banned_sequences:
            for target in (banned, reverse_complement(banned)):
                while target in debruijn[start:end]:
                    if end + 1 > total:
                        return barcodes
                    start += 1
                    end += 1
                    barcode_num += 1
        for accept in banned_functions:
            while not accept(debruijn[start:end]):
                if end + 1 > total:
                    return barcodes
                start += 1
                end += 1
                barcode_num += 1
        barcodes.append(debruijn[start:end])
    return barcodes


def create_barcodes(length: int, max_sub_sequence: int) -> list[str]:
    """Return barcodes with no banned sequences or functions."""
    return create_barcodes_with_banned_sequences(length, max_sub_sequence, (), ())