"""Codon tables, translation and codon optimisation."""

from __future__ import annotations

import json
import os
import random
from collections import Counter
from dataclasses import dataclass, field

_CODON_LENGTH = 3
_RARE_CODON_THRESHOLD = 0.10
_COMPROMISE_SCALE = 10000

_BASE1 = "TTTTTTTTTTTTTTTTCCCCCCCCCCCCCCCCAAAAAAAAAAAAAAAAGGGGGGGGGGGGGGGG"
_BASE2 = "TTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGG"
_BASE3 = "TCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAG"


class CodonTableError(ValueError):
    """Raised when a codon table or its input cannot be used."""


@dataclass
class Codon:
    """A codon triplet and its weight."""

    triplet: str
    weight: int = 1


@dataclass
class AminoAcid:
    """An amino acid letter and the codons that encode it."""

    letter: str
    codons: list[Codon] = field(default_factory=list)


@dataclass
class Table:
    """A codon table: start codons, stop codons and amino acid encodings."""

    start_codons: list[str] = field(default_factory=list)
    stop_codons: list[str] = field(default_factory=list)
    amino_acids: list[AminoAcid] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True if the table holds no codons of any kind."""
        return not (self.start_codons or self.stop_codons or self.amino_acids)

    def optimize_table(self, sequence: str) -> Table:
        """Return a copy of the table weighted by codon frequency in sequence."""
        frequencies = codon_frequency(sequence.upper())
        return Table(
            start_codons=list(self.start_codons),
            stop_codons=list(self.stop_codons),
            amino_acids=[
                AminoAcid(
                    amino_acid.letter,
                    [Codon(c.triplet, frequencies.get(c.triplet, 0)) for c in amino_acid.codons],
                )
                for amino_acid in self.amino_acids
            ],
        )

    def translation_table(self) -> dict[str, str]:
        """Return a mapping of codon triplet to amino acid letter."""
        return {
            codon.triplet: amino_acid.letter
            for amino_acid in self.amino_acids
            for codon in amino_acid.codons
        }


def codon_frequency(sequence: str) -> dict[str, int]:
    """Count the in-frame codons of a sequence; a trailing partial codon is ignored."""
    complete = len(sequence) - len(sequence) % _CODON_LENGTH
    return dict(
        Counter(sequence[i : i + _CODON_LENGTH] for i in range(0, complete, _CODON_LENGTH))
    )


def translate(sequence: str, codon_table: Table) -> str:
    """Translate a nucleic acid sequence into an uppercase amino acid sequence."""
    if codon_table.is_empty():
        raise CodonTableError("empty codon table")
    if not sequence:
        raise CodonTableError("empty sequence string")
    table = codon_table.translation_table()
    complete = len(sequence) - len(sequence) % _CODON_LENGTH
    return "".join(
        table.get(sequence[i : i + _CODON_LENGTH].upper(), "")
        for i in range(0, complete, _CODON_LENGTH)
    )


def _choosers(codon_table: Table) -> dict[str, tuple[list[str], list[int]]]:
    choosers: dict[str, tuple[list[str], list[int]]] = {}
    for amino_acid in codon_table.amino_acids:
        total = sum(codon.weight for codon in amino_acid.codons)
        kept = [
            codon
            for codon in amino_acid.codons
            if total > 0 and codon.weight / total > _RARE_CODON_THRESHOLD
        ]
        choosers[amino_acid.letter] = (
            [codon.triplet for codon in kept],
            [codon.weight for codon in kept],
        )
    return choosers


def optimize(amino_acids: str, codon_table: Table) -> str:
    """Return a codon sequence for an amino acid sequence, picking codons by weight.

    Codons making up 10% or less of an amino acid's usage are never chosen.
    """
    if codon_table.is_empty():
        raise CodonTableError("empty codon table")
    if not amino_acids:
        raise CodonTableError("empty amino acid string")
    choosers = _choosers(codon_table)
    rng = random.Random()
    codons = []
    for letter in amino_acids:
        triplets, weights = choosers.get(letter, ([], []))
        if not triplets:
            raise CodonTableError(f"no usable codon for amino acid {letter!r}")
        codons.append(rng.choices(triplets, weights=weights)[0])
    return "".join(codons)


def _generate_codon_table(amino_acids: str, starts: str) -> Table:
    encodings: dict[str, list[Codon]] = {}
    start_codons: list[str] = []
    stop_codons: list[str] = []
    for letter, start, b1, b2, b3 in zip(amino_acids, starts, _BASE1, _BASE2, _BASE3):
        triplet = b1 + b2 + b3
        encodings.setdefault(letter, []).append(Codon(triplet, 1))
        if start == "M":
            start_codons.append(triplet)
        elif start == "*":
            stop_codons.append(triplet)
    return Table(
        start_codons,
        stop_codons,
        [AminoAcid(letter, codons) for letter, codons in encodings.items()],
    )


_NCBI_TABLES = {
    1: ("FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**--*----M---------------M----------------------------"),
    2: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSS**VVVVAAAADDEEGGGG", "----------**--------------------MMMM----------**---M------------"),
    3: ("FFLLSSSSYY**CCWWTTTTPPPPHHQQRRRRIIMMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**----------------------MM---------------M------------"),
    4: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--MM------**-------M------------MMMM---------------M------------"),
    5: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSSSVVVVAAAADDEEGGGG", "---M------**--------------------MMMM---------------M------------"),
    6: ("FFLLSSSSYYQQCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    9: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "----------**-----------------------M---------------M------------"),
    10: ("FFLLSSSSYY**CCCWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**-----------------------M----------------------------"),
    11: ("FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**--*----M------------MMMM---------------M------------"),
    12: ("FFLLSSSSYY**CC*WLLLSPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*----M---------------M----------------------------"),
    13: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSGGVVVVAAAADDEEGGGG", "---M------**----------------------MM---------------M------------"),
    14: ("FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "-----------*-----------------------M----------------------------"),
    16: ("FFLLSSSSYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------*---*--------------------M----------------------------"),
    21: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "----------**-----------------------M---------------M------------"),
    22: ("FFLLSS*SYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "------*---*---*--------------------M----------------------------"),
    23: ("FF*LSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--*-------**--*-----------------M--M---------------M------------"),
    24: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG", "---M------**-------M---------------M---------------M------------"),
    25: ("FFLLSSSSYY**CCGWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**-----------------------M---------------M------------"),
    26: ("FFLLSSSSYY**CC*WLLLAPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*----M---------------M----------------------------"),
    27: ("FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    28: ("FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*--------------------M----------------------------"),
    29: ("FFLLSSSSYYYYCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    30: ("FFLLSSSSYYEECC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    31: ("FFLLSSSSYYEECCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**-----------------------M----------------------------"),
    33: ("FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG", "---M-------*-------M---------------M---------------M------------"),
}


def get_codon_table(index: int) -> Table:
    """Return a fresh copy of the NCBI codon table with the given number."""
    try:
        amino_acids, starts = _NCBI_TABLES[index]
    except KeyError:
        raise CodonTableError(f"no NCBI codon table numbered {index}") from None
    return _generate_codon_table(amino_acids, starts)


def _table_from_dict(raw: dict) -> Table:
    return Table(
        start_codons=list(raw.get("start_codons") or []),
        stop_codons=list(raw.get("stop_codons") or []),
        amino_acids=[
            AminoAcid(
                amino_acid.get("letter", ""),
                [
                    Codon(codon.get("triplet", ""), codon.get("weight", 0))
                    for codon in amino_acid.get("codons") or []
                ],
            )
            for amino_acid in raw.get("amino_acids") or []
        ],
    )


def _table_to_dict(table: Table) -> dict:
    return {
        "start_codons": table.start_codons,
        "stop_codons": table.stop_codons,
        "amino_acids": [
            {
                "letter": amino_acid.letter,
                "codons": [
                    {"triplet": codon.triplet, "weight": codon.weight}
                    for codon in amino_acid.codons
                ],
            }
            for amino_acid in table.amino_acids
        ],
    }


def parse_codon_json(data: str | bytes) -> Table:
    """Parse a codon table from JSON text."""
    raw = json.loads(data)
    if not isinstance(raw, dict):
        raise CodonTableError("codon table JSON must be an object")
    return _table_from_dict(raw)


def read_codon_json(path: str | os.PathLike) -> Table:
    """Read a codon table from a JSON file."""
    with open(path, encoding="utf-8") as handle:
        return parse_codon_json(handle.read())


def write_codon_json(codon_table: Table, path: str | os.PathLike) -> None:
    """Write a codon table to a JSON file."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(_table_to_dict(codon_table), indent=1))


def _scaled_weight(weight: int, total: int) -> int | None:
    if total == 0:
        return None
    return int(weight / total * _COMPROMISE_SCALE)


def compromise_codon_table(first_codon_table: Table, second_codon_table: Table, cut_off: float) -> Table:
    """Return a table that weighs both tables' codon usage equally.

    Codons below ``cut_off`` (a fraction of an amino acid's usage) in either
    table get weight zero.
    """
    if cut_off < 0:
        raise CodonTableError("Cut off too low. Cannot be less than 0 or greater than 1")
    if cut_off > 1:
        raise CodonTableError("Cut off too high. Cannot be greater than 1")

    cut_off_weight = int(_COMPROMISE_SCALE * cut_off)
    final_amino_acids = []
    for first_aa in first_codon_table.amino_acids:
        second_weights: dict[str, list[int]] = {}
        for second_aa in second_codon_table.amino_acids:
            if second_aa.letter == first_aa.letter:
                for codon in second_aa.codons:
                    second_weights.setdefault(codon.triplet, []).append(codon.weight)

        paired = []
        for codon in first_aa.codons:
            matches = second_weights.get(codon.triplet)
            if not matches:
                raise CodonTableError(
                    f"codon {codon.triplet} for {first_aa.letter!r} is missing from the second table"
                )
            paired.extend((codon.triplet, codon.weight, weight) for weight in matches)

        first_total = sum(codon.weight for codon in first_aa.codons)
        second_total = sum(second for _, _, second in paired)
        codons = []
        for triplet, first_weight, second_weight in paired[: len(first_aa.codons)]:
            first_scaled = _scaled_weight(first_weight, first_total)
            second_scaled = _scaled_weight(second_weight, second_total)
            if (
                first_scaled is None
                or second_scaled is None
                or first_scaled < cut_off_weight
                or second_scaled < cut_off_weight
            ):
                weight = 0
            else:
                weight = int((first_scaled + second_scaled) / 2)
            codons.append(Codon(triplet, weight))
        final_amino_acids.append(AminoAcid(first_aa.letter, codons))

    return Table(
        list(first_codon_table.start_codons),
        list(first_codon_table.stop_codons),
        final_amino_acids,
    )


def add_codon_table(first_codon_table: Table, second_codon_table: Table) -> Table:
    """Return a table whose codon weights are the sum of both tables' weights."""
    final_amino_acids = [
        AminoAcid(
            first_aa.letter,
            [
                Codon(first_codon.triplet, first_codon.weight + second_codon.weight)
                for first_codon in first_aa.codons
                for second_aa in second_codon_table.amino_acids
                for second_codon in second_aa.codons
                if first_codon.triplet == second_codon.triplet
            ],
        )
        for first_aa in first_codon_table.amino_acids
    ]
    return Table(
        list(first_codon_table.start_codons),
        list(first_codon_table.stop_codons),
        final_amino_acids,
    )