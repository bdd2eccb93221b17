# polyseq

Utilities for working with DNA, RNA and protein sequences. The package is
pure Python and has no dependencies outside the standard library.

## Install

```
pip install polyseq
```

To run the tests:

```
pip install "polyseq[test]"
pytest
```

## Modules

### `polyseq.transform`

- `complement(sequence)`, `reverse(sequence)`, `reverse_complement(sequence)`.
- `complement_base(base)` complements one IUPAC base, upper or lower case
  (`U` complements to `A`). A character it does not know maps to `"\x00"`.

### `polyseq.variants`

- `all_variants_iupac(seq)` returns every concrete sequence an ambiguous
  IUPAC string stands for, e.g. `"ATN"` gives `["ATG", "ATA", "ATT", "ATC"]`.
  Input is upper-cased first; an unsupported letter raises `ValueError`.

### `polyseq.primers`

- `santa_lucia(sequence, primer_concentration, salt_concentration,
  magnesium_concentration)` returns `(melting_temp, dH, dS)` by the
  nearest-neighbour method. An empty sequence raises `ValueError`.
- `melting_temp(sequence)` calls `santa_lucia` with 500 nM primer, 50 mM
  sodium and no magnesium.
- `marmur_doty(sequence)` gives the melting temperature of very short
  sequences: `2*(A+T) + 4*(G+C) - 7`.
- `nucleobase_de_bruijn_sequence(substring_length)` builds a De Bruijn
  sequence over `ATGC` in which every substring of that length appears once.
- `create_barcodes(length, max_sub_sequence)` cuts barcodes out of that
  sequence so that no two share a substring of `max_sub_sequence` bases.
- `create_barcodes_with_banned_sequences(length, max_sub_sequence,
  banned_sequences, banned_functions)` does the same, moving a barcode
  forward while it contains a banned sequence or its reverse complement,
  or while any function in `banned_functions` returns `False` for it.

### `polyseq.random_sequence`

- `protein_sequence(length, seed)` gives a random protein that starts with
  `M` and ends with `*`; `length` must be greater than 2 or `ValueError` is
  raised.
- `dna_sequence(length, seed)` gives a random DNA sequence.

The same seed gives the same sequence.

### `polyseq.seqhash`

- `hash_sequence(sequence, sequence_type, circular, double_stranded)`
  returns an identifier such as
  `v1_DLD_f4028f93e08c5c23cbb8daa189b0a9802b378f1a1c919dcbcf1608a615f46350`:
  a version tag, three metadata letters (`D`/`R`/`P` for DNA, RNA or
  PROTEIN; `C`/`L` for circular or linear; `D`/`S` for double or single
  stranded) and a BLAKE3 hex digest. Circular sequences are rotated to
  their least rotation and double stranded ones compared with their
  reverse complement, so any rotation or strand of the same molecule
  hashes the same. RNA is hashed as DNA (`U` becomes `T`). An unknown type,
  a disallowed letter or a double stranded protein raises `ValueError`.
- `rotate_sequence(sequence)` returns the lexicographically least rotation.

### `polyseq.codon`

- Data classes `Codon(triplet, weight)`, `AminoAcid(letter, codons)` and
  `Table(start_codons, stop_codons, amino_acids)`.
  `Table.translation_table()` maps triplets to amino acid letters,
  `Table.optimize_table(sequence)` returns a copy weighted by codon counts
  in a sequence, and `Table.is_empty()` tells whether the table holds
  anything.
- `get_codon_table(index)` returns the NCBI genetic code with that number.
- `translate(sequence, codon_table)` translates in frame, case-insensitively.
- `optimize(amino_acids, codon_table)` picks codons at random by weight,
  never choosing a codon that makes up 10% or less of an amino acid's usage.
  The result differs from call to call.
- `codon_frequency(sequence)` counts in-frame codons.
- `parse_codon_json(data)`, `read_codon_json(path)`,
  `write_codon_json(codon_table, path)` read and write tables as JSON with
  the keys `start_codons`, `stop_codons` and `amino_acids` (each holding
  `letter` and `codons` of `triplet` and `weight`).
- `add_codon_table(first, second)` sums weights of matching triplets.
- `compromise_codon_table(first, second, cut_off)` weighs both tables
  equally, zeroing codons below `cut_off` (a fraction between 0 and 1) in
  either one.

Errors are raised as `CodonTableError` (a `ValueError`): an empty table, an
empty sequence, an unknown table number, an out-of-range cut-off.

### `polyseq.fix`

- `cds(sequence, codon_table, problematic_sequence_funcs)` swaps synonymous
  codons until none of the finders reports a problem, and returns
  `(fixed_sequence, changes)`, where each `Change` has `position`, `step`,
  `from_codon`, `to_codon` and `reason`. A finder is any callable taking a
  sequence and returning `DnaSuggestion(start, end, bias, quantity_fixes,
  suggestion_type)` objects, with `bias` one of `"NA"`, `"GC"`, `"AT"`.
- Finder factories: `remove_sequence(sequences_to_remove, reason)` (regular
  expressions, matched on both strands), `remove_repeat(repeat_len)` and
  `gc_content_fixer(upper_bound, lower_bound)`.
- `cds_simple(sequence, codon_table, sequences_to_remove)` removes 8 bp
  A/G homopolymers, the given sequences, 18 bp repeats, and GC content
  above 80% or below 20%.

A sequence whose length is not a multiple of three, a codon table with an
amino acid of total weight zero, an invalid bias, or a problem that cannot
be fixed raises `FixError` (a `ValueError`).

## Example

```python
from polyseq.transform import reverse_complement
from polyseq.primers import melting_temp
from polyseq.seqhash import hash_sequence
from polyseq.codon import get_codon_table, translate

reverse_complement("GATTACA")            # "TGTAATC"
melting_temp("GTAAAACGACGGCCAGT")        # about 52.8
hash_sequence("ATGC", "DNA", False, True)
# "v1_DLD_f4028f93e08c5c23cbb8daa189b0a9802b378f1a1c919dcbcf1608a615f46350"
translate("ATGGCTTAA", get_codon_table(11))  # "MA*"
```

## What it does not do

- It reads no sequence file formats such as GenBank or FASTA; pass
  sequences in as strings. To weight a codon table by an organism's genes,
  gather their coding sequences yourself and give them to
  `Table.optimize_table`.
- It does not split sequences into fragments for assembly.
- It has no command-line interface; it is a library only.