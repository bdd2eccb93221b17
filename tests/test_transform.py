import pytest

from polyseq.transform import complement, complement_base, reverse, reverse_complement


def test_reverse_complement_example():
    assert reverse_complement("GATTACA") == "TGTAATC"


def test_complement_example():
    assert complement("GATTACA") == "CTAATGT"


def test_reverse_example():
    assert reverse("GATTACA") == "ACATTAG"


def test_complement_lowercase():
    assert complement("gattaca") == "ctaatgt"


@pytest.mark.parametrize(
    "base, expected",
    [("A", "T"), ("U", "A"), ("R", "Y"), ("N", "N"), ("g", "c"), ("u", "a")],
)
def test_complement_base(base, expected):
    assert complement_base(base) == expected


def test_unknown_base_maps_to_nul():
    assert complement_base("X") == "\x00"
    assert complement("AXT") == "T\x00A"


def test_reverse_complement_round_trip():
    sequence = "ACGTBDHKMRSVWYN"
    assert reverse_complement(reverse_complement(sequence)) == sequence


def test_palindrome_is_own_reverse_complement():
    assert reverse_complement("ACGTAGATCTACGT") == "ACGTAGATCTACGT"