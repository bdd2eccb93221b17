"""Seqhash: deterministic, rotation- and strand-independent sequence identifiers."""

import struct

from .transform import reverse_complement

_DNA_LETTERS = frozenset("ATUGCYRSWKMBDHVNZ")
_PROTEIN_LETTERS = frozenset("ACDEFGHIKLMNPQRSTVWYUO*BXZ")
_TYPE_LETTERS = {"DNA": "D", "RNA": "R", "PROTEIN": "P"}

# BLAKE3 constants.
_MASK = 0xFFFFFFFF
_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
_MSG_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)
_CHUNK_START = 1 << 0
_CHUNK_END = 1 << 1
_PARENT = 1 << 2
_ROOT = 1 << 3
_BLOCK_LEN = 64
_CHUNK_LEN = 1024
_G_SCHEDULE = (
    (0, 4, 8, 12, 0, 1),
    (1, 5, 9, 13, 2, 3),
    (2, 6, 10, 14, 4, 5),
    (3, 7, 11, 15, 6, 7),
    (0, 5, 10, 15, 8, 9),
    (1, 6, 11, 12, 10, 11),
    (2, 7, 8, 13, 12, 13),
    (3, 4, 9, 14, 14, 15),
)


def _rotr(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _round(state: list[int], message: list[int]) -> None:
    for a, b, c, d, x, y in _G_SCHEDULE:
        state[a] = (state[a] + state[b] + message[x]) & _MASK
        state[d] = _rotr(state[d] ^ state[a], 16)
        state[c] = (state[c] + state[d]) & _MASK
        state[b] = _rotr(state[b] ^ state[c], 12)
        state[a] = (state[a] + state[b] + message[y]) & _MASK
        state[d] = _rotr(state[d] ^ state[a], 8)
        state[c] = (state[c] + state[d]) & _MASK
        state[b] = _rotr(state[b] ^ state[c], 7)


def _compress(cv, block_words, counter: int, block_len: int, flags: int) -> list[int]:
    state = [
        *cv,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    message = list(block_words)
    for round_number in range(7):
        _round(state, message)
        if round_number < 6:
            message = [message[i] for i in _MSG_PERMUTATION]
    for i in range(8):
        state[i] ^= state[i + 8]
        state[i + 8] ^= cv[i]
    return state


def _words(block: bytes) -> tuple[int, ...]:
    return struct.unpack("<16I", block.ljust(_BLOCK_LEN, b"\x00"))


def _chunk_output(chunk: bytes, counter: int) -> tuple:
    blocks = [chunk[i : i + _BLOCK_LEN] for i in range(0, len(chunk), _BLOCK_LEN)] or [b""]
    cv = _IV
    for index, block in enumerate(blocks[:-1]):
        flags = _CHUNK_START if index == 0 else 0
        cv = _compress(cv, _words(block), counter, _BLOCK_LEN, flags)[:8]
    last = blocks[-1]
    flags = _CHUNK_END | (_CHUNK_START if len(blocks) == 1 else 0)
    return cv, _words(last), counter, len(last), flags


def _chaining_value(output: tuple) -> list[int]:
    return _compress(*output)[:8]


def _parent_output(left: list[int], right: list[int]) -> tuple:
    return _IV, (*left, *right), 0, _BLOCK_LEN, _PARENT


def _blake3_hex(data: bytes) -> str:
    """Return the 256-bit BLAKE3 digest of data as lowercase hex."""
    chunks = [data[i : i + _CHUNK_LEN] for i in range(0, len(data), _CHUNK_LEN)] or [b""]
    stack: list[list[int]] = []
    for counter, chunk in enumerate(chunks[:-1]):
        cv = _chaining_value(_chunk_output(chunk, counter))
        total_chunks = counter + 1
        while total_chunks & 1 == 0:
            cv = _chaining_value(_parent_output(stack.pop(), cv))
            total_chunks >>= 1
        stack.append(cv)
    output = _chunk_output(chunks[-1], len(chunks) - 1)
    while stack:
        output = _parent_output(stack.pop(), _chaining_value(output))
    cv, block_words, counter, block_len, flags = output
    root = _compress(cv, block_words, counter, block_len, flags | _ROOT)[:8]
    return struct.pack("<8I", *root).hex()


def _booth_least_rotation(sequence: str) -> int:
    """Return the start index of the lexicographically least rotation."""
    doubled = sequence + sequence
    failure = [-1] * len(doubled)
    least = 0
    for index in range(1, len(doubled)):
        character = doubled[index]
        fail = failure[index - least - 1]
        while fail != -1 and character != doubled[least + fail + 1]:
            if character < doubled[least + fail + 1]:
                least = index - fail - 1
            fail = failure[fail]
        if character != doubled[least + fail + 1]:
            if character < doubled[least]:
                least = index
            failure[index - least] = -1
        else:
            failure[index - least] = fail + 1
    return least


def rotate_sequence(sequence: str) -> str:
    """Rotate a circular sequence to its deterministic (least) rotation."""
    index = _booth_least_rotation(sequence)
    return (sequence + sequence)[index : index + len(sequence)]


def hash_sequence(sequence: str, sequence_type: str, circular: bool, double_stranded: bool) -> str:
    """Return the Seqhash of a DNA, RNA or PROTEIN sequence.

    Raises ValueError for an unknown sequence type, a disallowed letter, or a
    double stranded protein.
    """
    sequence = sequence.upper()
    if sequence_type == "RNA":
        sequence = sequence.replace("U", "T")

    if sequence_type not in _TYPE_LETTERS:
        raise ValueError(
            f"Only sequenceTypes of DNA, RNA, or PROTEIN allowed. Got sequenceType: {sequence_type}"
        )
    if sequence_type in ("DNA", "RNA"):
        for char in sequence:
            if char not in _DNA_LETTERS:
                raise ValueError(
                    f"Only letters ATUGCYRSWKMBDHVNZ are allowed for DNA/RNA. Got letter: {char}"
                )
    else:
        for char in sequence:
            if char not in _PROTEIN_LETTERS:
                raise ValueError(
                    "Only letters ACDEFGHIKLMNPQRSTVWYUO*BXZ are allowed for Proteins. "
                    f"Got letter: {char}"
                )
        if double_stranded:
            raise ValueError("Proteins cannot be double stranded")

    if circular and double_stranded:
        deterministic = min(rotate_sequence(sequence), rotate_sequence(reverse_complement(sequence)))
    elif circular:
        deterministic = rotate_sequence(sequence)
    elif double_stranded:
        deterministic = min(sequence, reverse_complement(sequence))
    else:
        deterministic = sequence

    metadata = (
        _TYPE_LETTERS[sequence_type]
        + ("C" if circular else "L")
        + ("D" if double_stranded else "S")
    )
    digest = _blake3_hex(deterministic.encode("utf-8"))
    return f"v1_{metadata}_{digest}"