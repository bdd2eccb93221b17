"""Fix protein coding sequences for synthesis using synonymous codons.

Problem finders scan a sequence and yield :class:`DnaSuggestion` objects that
name a codon range, a GC/AT bias and how many codons must change. :func:`cds`
repeatedly applies the best-weighted synonymous codon changes until no finder
reports a problem.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .codon import Table
from .transform import reverse_complement

_CODON_LENGTH = 3
_BIASES = ("NA", "GC", "AT")

ProblemFinder = Callable[[str], Iterable["DnaSuggestion"]]


class FixError(ValueError):
    """Raised when a sequence cannot be fixed."""


@dataclass(frozen=True)
class DnaSuggestion:
    """A codon range to change; bias is "NA" (neutral), "GC" or "AT"."""

    start: int
    end: int
    bias: str
    quantity_fixes: int
    suggestion_type: str


@dataclass(frozen=True)
class Change:
    """One codon substitution made while fixing a sequence."""

    position: int
    step: int
    from_codon: str
    to_codon: str
    reason: str


def _gc_content(sequence: str) -> float:
    if not sequence:
        return 0.0
    upper = sequence.upper()
    return (upper.count("G") + upper.count("C")) / len(sequence)


def remove_sequence(sequences_to_remove: Iterable[str], reason: str) -> ProblemFinder:
    """Return a finder for the given patterns and their reverse complements."""
    patterns = list(sequences_to_remove)

    def find(sequence: str) -> Iterator[DnaSuggestion]:
        for pattern in patterns:
            for site in (pattern, reverse_complement(pattern)):
                for match in re.finditer(site, sequence):
                    yield DnaSuggestion(
                        match.start() // _CODON_LENGTH,
                        match.end() // _CODON_LENGTH - 1,
                        "NA",
                        1,
                        reason,
                    )

    return find


def remove_repeat(repeat_len: int) -> ProblemFinder:
    """Return a finder for repeated k-mers (or reverse complements) of the given length."""

    def find(sequence: str) -> Iterator[DnaSuggestion]:
        seen: set[str] = set()
        position = 0
        while position < len(sequence) - repeat_len:
            kmer = sequence[position : position + repeat_len]
            repeated = kmer in seen or reverse_complement(kmer) in seen
            seen.add(kmer)
            if repeated:
                codon_position, leftover = divmod(position, _CODON_LENGTH)
                end_position = (position + repeat_len) // _CODON_LENGTH
                if leftover != 0:
                    end_position -= 1
                yield DnaSuggestion(codon_position, end_position, "NA", 1, "Repeat sequence")
                position += leftover
            position += 1

    return find


def gc_content_fixer(upper_bound: float, lower_bound: float) -> ProblemFinder:
    """Return a finder that pushes GC content into [lower_bound, upper_bound]."""

    def find(sequence: str) -> Iterator[DnaSuggestion]:
        gc = _gc_content(sequence)
        last_codon = len(sequence) // _CODON_LENGTH - 1
        if gc > upper_bound:
            changes = int((gc - upper_bound) * len(sequence)) + 1
            yield DnaSuggestion(0, last_codon, "AT", changes, "GcContent too high")
        if gc < lower_bound:
            changes = int((lower_bound - gc) * len(sequence)) + 1
            yield DnaSuggestion(0, last_codon, "GC", changes, "GcContent too low")

    return find


def _gc_count(triplet: str) -> int:
    return triplet.count("G") + triplet.count("C")


def _codon_maps(codon_table: Table) -> tuple[dict[str, float], dict[str, dict[str, list[str]]]]:
    bias_maps: dict[str, dict[str, list[str]]] = {bias: {} for bias in _BIASES}
    totals: dict[str, int] = {}
    for amino_acid in codon_table.amino_acids:
        total = 0
        for codon in amino_acid.codons:
            total += codon.weight
            codon_bias = _gc_count(codon.triplet)
            for target in amino_acid.codons:
                if target.triplet == codon.triplet:
                    continue
                target_bias = _gc_count(target.triplet)
                if codon_bias > target_bias:
                    bias_maps["AT"].setdefault(codon.triplet, []).append(target.triplet)
                elif codon_bias < target_bias:
                    bias_maps["GC"].setdefault(codon.triplet, []).append(target.triplet)
                bias_maps["NA"].setdefault(codon.triplet, []).append(target.triplet)
        if total == 0:
            raise FixError("incomplete codon table")
        totals[amino_acid.letter] = total

    weights = {
        codon.triplet: 100 * codon.weight / totals[amino_acid.letter]
        for amino_acid in codon_table.amino_acids
        for codon in amino_acid.codons
    }
    return weights, bias_maps


def cds(
    sequence: str,
    codon_table: Table,
    problematic_sequence_funcs: Iterable[ProblemFinder],
) -> tuple[str, list[Change]]:
    """Fix a CDS with synonymous codons; return the fixed sequence and the changes made."""
    if len(sequence) % _CODON_LENGTH != 0:
        raise FixError(
            "this sequence isn't a complete CDS, please try to use a CDS without interrupted codons"
        )
    finders = list(problematic_sequence_funcs)
    weights, bias_maps = _codon_maps(codon_table)
    history = [
        [sequence[i : i + _CODON_LENGTH]] for i in range(0, len(sequence), _CODON_LENGTH)
    ]

    changes: list[Change] = []
    step = 0
    while True:
        suggestions = [suggestion for find in finders for suggestion in find(sequence)]
        if not suggestions:
            changes.sort(key=lambda change: (change.step, change.position))
            return sequence, changes

        for suggestion in suggestions:
            bias_map = bias_maps.get(suggestion.bias)
            if bias_map is None:
                raise FixError(f"Invalid bias. Expected NA, GC, or AT, got {suggestion.bias}")
            if suggestion.start < 0:
                raise FixError(f"Invalid suggestion start {suggestion.start}")

            potential: list[Change] = []
            for position in range(suggestion.start, min(suggestion.end + 1, len(history))):
                codons = history[position]
                last = codons[-1]
                used = set(codons)
                potential.extend(
                    Change(position, step, last, candidate, suggestion.suggestion_type)
                    for candidate in bias_map.get(last, [])
                    if candidate not in used
                )
            potential.sort(key=lambda change: weights.get(change.to_codon, 0.0), reverse=True)

            best: list[Change] = []
            used_positions: set[int] = set()
            for change in potential:
                if change.position not in used_positions:
                    used_positions.add(change.position)
                    best.append(change)

            if len(best) < suggestion.quantity_fixes:
                raise FixError(
                    f"Too many fixes required. Number of potential fixes: {len(potential)} , "
                    f"number of required fixes: {suggestion.quantity_fixes}"
                )
            for change in best[: suggestion.quantity_fixes]:
                history[change.position].append(change.to_codon)
                changes.append(change)
            sequence = "".join(codons[-1] for codons in history)
        step += 1


def cds_simple(
    sequence: str, codon_table: Table, sequences_to_remove: Iterable[str]
) -> tuple[str, list[Change]]:
    """Fix a CDS removing homopolymers, user sequences, 18 bp repeats and extreme GC content."""
    finders = [
        remove_sequence(["AAAAAAAA", "GGGGGGGG"], "Homopolymers"),
        remove_sequence(list(sequences_to_remove), "Removal requested by user"),
        remove_repeat(18),
        gc_content_fixer(0.80, 0.20),
    ]
    return cds(sequence, codon_table, finders)