import pytest

from polyseq.primers import (
    create_barcodes,
    create_barcodes_with_banned_sequences,
    marmur_doty,
    melting_temp,
    nucleobase_de_bruijn_sequence,
    santa_lucia,
)
from polyseq.transform import reverse_complement


def test_marmur_doty():
    assert marmur_doty("ACGTCCGGACTT") == 31.0


def test_santa_lucia():
    tm, _, _ = santa_lucia("ACGATGGCAGTAGCATGC", 0.1e-6, 350e-3, 0.0)
    assert tm == pytest.approx(62.7, rel=0.02)


def test_santa_lucia_reverse_complement():
    sequence = "ACGTAGATCTACGT"
    assert reverse_complement(sequence) == sequence
    tm, _, _ = santa_lucia(sequence, 0.1e-6, 350e-3, 0.0)
    assert tm == pytest.approx(47.428514, rel=0.02)


def test_santa_lucia_case_insensitive():
    upper = santa_lucia("ACGATGGCAGTAGCATGC", 0.1e-6, 350e-3, 0.0)
    lower = santa_lucia("acgatggcagtagcatgc", 0.1e-6, 350e-3, 0.0)
    assert upper == lower


def test_santa_lucia_empty_raises():
    with pytest.raises(ValueError):
        santa_lucia("", 0.1e-6, 350e-3, 0.0)


def test_melting_temp():
    assert melting_temp("GTAAAACGACGGCCAGT") == pytest.approx(52.8, rel=0.02)


def test_de_bruijn_example():
    expected = (
        "AAAATAAAGAAACAATTAATGAATCAAGTAAGGAAGCAACTAACGAACCATATAGATACATTTATTGATTCATGTATGG"
        "ATGCATCTATCGATCCAGAGACAGTTAGTGAGTCAGGTAGGGAGGCAGCTAGCGAGCCACACTTACTGACTCACGTACGG"
        "ACGCACCTACCGACCCTTTTGTTTCTTGGTTGCTTCGTTCCTGTGTCTGGGTGGCTGCGTGCCTCTCGGTCGCTCCGTCC"
        "CGGGGCGGCCGCGCCCCAAA"
    )
    assert nucleobase_de_bruijn_sequence(4) == expected


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_de_bruijn_every_substring_once(n):
    sequence = nucleobase_de_bruijn_sequence(n)
    assert len(sequence) == 4**n + n - 1
    substrings = [sequence[i : i + n] for i in range(len(sequence) - n + 1)]
    assert len(set(substrings)) == 4**n == len(substrings)


def test_create_barcodes_with_banned_sequences_first():
    barcodes = create_barcodes_with_banned_sequences(20, 4, ["CTCTCGGTCGCTCC"], [])
    assert barcodes[0] == "AAAATAAAGAAACAATTAAT"


def test_create_barcodes_first():
    assert create_barcodes(20, 4)[0] == "AAAATAAAGAAACAATTAAT"


def test_create_barcode_with_function():
    barcodes = create_barcodes_with_banned_sequences(
        20, 4, [], [lambda s: "GGCCGCGCCCC" not in s]
    )
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_create_barcode_with_banned_sequence():
    barcodes = create_barcodes_with_banned_sequences(20, 4, ["GGCCGCGCCCC"], [])
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_create_barcode_with_banned_reverse_complement():
    barcodes = create_barcodes_with_banned_sequences(
        20, 4, [reverse_complement("GGCCGCGCCCC")], []
    )
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_barcodes_have_requested_length_and_no_banned_content():
    banned = "GGCCGCGCCCC"
    barcodes = create_barcodes_with_banned_sequences(20, 4, [banned], [])
    assert barcodes
    for barcode in barcodes:
        assert len(barcode) == 20
        assert banned not in barcode
        assert reverse_complement(banned) not in barcode