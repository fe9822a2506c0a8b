from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError

ALPHABET = ("A", "C", "G", "T")
MAX_SNPS = 10000
DEFAULT_ID = "makesnps"


@dataclass(frozen=True)
class Substitution:
    """A single SNP: the reference base at a 0-based position and its replacement."""
    position: int
    reference: str
    snp: str

    def to_csv_row(self) -> List[object]:
        """Convert to a ledger row (Position, Reference, SNP)."""
        return [self.position, self.reference, self.snp]


@dataclass(frozen=True)
class RunConfig:
    """Parameters for one makesnps run."""
    input_path: str
    output_path: str
    ledger_path: str
    output_id: str = DEFAULT_ID
    count: int = 1000
    min_distance: int = 100
    column_width: int = 70
    seed: Optional[int] = None
    verbose: bool = False

    def validate(self) -> None:
        if not self.input_path:
            raise ConfigurationError("You must specify an input file.")
        if not self.output_path:
            raise ConfigurationError("You must specify an output file.")
        if not self.ledger_path:
            raise ConfigurationError("You must specify a SNP list filename.")
        if not self.output_id:
            raise ConfigurationError("Output sequence id must not be empty.")
        if self.count < 1 or self.count > MAX_SNPS:
            raise ConfigurationError(f"number of SNPs must be between 1 and {MAX_SNPS}.")
        if self.min_distance < 1:
            raise ConfigurationError("minimum distance between SNPs must be at least 1.")
        if self.column_width < 1:
            raise ConfigurationError("column width must be at least 1.")
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError("seed must be a non-negative integer.")

    def parameter_lines(self) -> List[str]:
        """Parameter table, printed in verbose mode."""
        seed = "random" if self.seed is None else str(self.seed)
        return [
            f"      Input filename: {self.input_path}",
            f"     Output filename: {self.output_path}",
            f"  Output sequence ID: {self.output_id}",
            f"   SNP list filename: {self.ledger_path}",
            f"      Number of SNPs: {self.count}",
            f"Min distance between: {self.min_distance}",
            f"        Column width: {self.column_width}",
            f"                Seed: {seed}",
        ]
