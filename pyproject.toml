[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyseq"
version = "0.1.0"
description = "DNA, RNA and protein sequence utilities: transforms, primers, barcodes, seqhash, codon tables and synthesis fixing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bioinformatics",
    "dna",
    "codon",
    "primers",
    "barcodes",
    "de-bruijn",
    "seqhash",
    "synthetic-biology",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["polyseq"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
