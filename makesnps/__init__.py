"""Make a copy of a reference sequence with SNPs in it."""

__version__ = "0.1.0"
