import pytest

from polyseq.codon import AminoAcid, Codon, Table, get_codon_table, translate
from polyseq.fix import (
    Change,
    DnaSuggestion,
    FixError,
    cds,
    cds_simple,
    gc_content_fixer,
    remove_repeat,
    remove_sequence,
)
from polyseq.transform import reverse_complement

SHORT_CDS = "ATGGCTAGCAAAGGAGAAGAACTTTTCACTGGA"


@pytest.fixture
def table():
    return get_codon_table(11)


def _gc(sequence):
    return (sequence.count("G") + sequence.count("C")) / len(sequence)


def _bad_bias_finder(sequence):
    return [DnaSuggestion(0, 0, "XY", 1, "bad")]


def _greedy_finder(sequence):
    return [DnaSuggestion(0, 1, "NA", 100, "greedy")]


def test_remove_sequence_reports_codon_range():
    finder = remove_sequence(["GGTCTC"], "user")
    suggestions = list(finder("AAAGGTCTCAAA"))
    assert suggestions == [DnaSuggestion(1, 2, "NA", 1, "user")]


def test_remove_sequence_finds_reverse_complement():
    finder = remove_sequence(["GGTCTC"], "user")
    suggestions = list(finder("AAA" + reverse_complement("GGTCTC") + "AAA"))
    assert len(suggestions) == 1
    assert suggestions[0].suggestion_type == "user"


def test_remove_sequence_no_match():
    assert list(remove_sequence(["GGTCTC"], "user")("AAAAAA")) == []


def test_remove_repeat_detects_and_ignores():
    unique = "ACGTTGCA"
    assert list(remove_repeat(4)(unique)) == []
    repeated = list(remove_repeat(4)("AACCAAAACCAAAA"))
    assert repeated
    assert all(s.suggestion_type == "Repeat sequence" and s.bias == "NA" for s in repeated)


def test_gc_content_fixer_high_and_low():
    high = list(gc_content_fixer(0.8, 0.2)("GGGCCC"))
    assert len(high) == 1
    assert high[0].bias == "AT"
    assert high[0].suggestion_type == "GcContent too high"
    assert high[0].start == 0
    low = list(gc_content_fixer(0.8, 0.2)("AAATTT"))
    assert [s.bias for s in low] == ["GC"]
    assert low[0].suggestion_type == "GcContent too low"
    assert list(gc_content_fixer(0.8, 0.2)("AAAGGG")) == []


def test_cds_rejects_partial_codons(table):
    with pytest.raises(FixError):
        cds("ATGA", table, [])


def test_cds_simple_leaves_clean_sequence(table):
    fixed, changes = cds_simple(SHORT_CDS, table, [])
    assert fixed == SHORT_CDS
    assert changes == []


def test_cds_simple_removes_requested_site(table):
    sequence = "ATGGGTCTCAAATAA"
    fixed, changes = cds_simple(sequence, table, ["GGTCTC"])
    assert "GGTCTC" not in fixed
    assert "GAGACC" not in fixed
    assert translate(fixed, table) == translate(sequence, table)
    assert changes
    assert all(change.reason == "Removal requested by user" for change in changes)
    assert fixed == "ATGGGCCTCAAATAA"


def test_cds_removes_homopolymer(table):
    sequence = "ATGAAAAAAAAATAA"
    fixed, changes = cds(sequence, table, [remove_sequence(["AAAAAAAA"], "Homopolymers")])
    assert "AAAAAAAA" not in fixed
    assert translate(fixed, table) == translate(sequence, table)
    assert len(changes) == 1
    assert changes[0] == Change(changes[0].position, 0, "AAA", "AAG", "Homopolymers")


def test_cds_lowers_gc_content(table):
    sequence = "GCCGCCGCCGCC"
    fixed, changes = cds(sequence, table, [gc_content_fixer(0.8, 0.2)])
    assert _gc(fixed) <= 0.8
    assert translate(fixed, table) == translate(sequence, table)
    assert all(change.reason == "GcContent too high" for change in changes)
    positions = [change.position for change in changes]
    assert len(positions) == len(set(positions))


def test_cds_changes_sorted_by_step_and_position(table):
    sequence = "GCCGCCGCCGCC"
    _, changes = cds(sequence, table, [gc_content_fixer(0.8, 0.2)])
    keys = [(change.step, change.position) for change in changes]
    assert keys == sorted(keys)


def test_cds_invalid_bias(table):
    with pytest.raises(FixError):
        cds("ATGGCC", table, [_bad_bias_finder])


def test_cds_too_many_fixes(table):
    with pytest.raises(FixError):
        cds("ATGGCC", table, [_greedy_finder])


def test_cds_incomplete_codon_table():
    empty_weights = Table(
        ["ATG"], ["TAA"], [AminoAcid("M", [Codon("ATG", 0)]), AminoAcid("*", [Codon("TAA", 1)])]
    )
    with pytest.raises(FixError):
        cds("ATGTAA", empty_weights, [])


def test_cds_unfixable_methionine(table):
    # Methionine has a single codon, so no synonymous change exists.
    with pytest.raises(FixError):
        cds("ATGATG", table, [remove_sequence(["ATGATG"], "user")])