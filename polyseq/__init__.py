"""Sequence utilities for DNA, RNA and proteins: transforms, IUPAC variants,
primers and barcodes, random sequences, seqhash, codon tables and CDS fixing."""

__version__ = "0.1.0"

__all__ = ["codon", "fix", "primers", "random_sequence", "seqhash", "transform", "variants"]