"""Output formatting: mutated FASTA, SNP ledger and the SNP distribution check."""
import contextlib
import csv
import os
import sys
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .errors import FileAccessError, InvalidConfiguration
from .models import Substitution
from .sequence_store import SequenceStore

LEDGER_HEADER = ["Position", "Reference", "SNP"]


def apply_substitutions(store: SequenceStore, substitutions: Sequence[Substitution]) -> np.ndarray:
    """Return a mutated copy of the reference codes; the reference is untouched."""
    mutated = store.codes.copy()
    if substitutions:
        positions = np.array([s.position for s in substitutions], dtype=np.int64)
        mutated[positions] = np.frombuffer(
            "".join(s.snp for s in substitutions).encode("ascii"), dtype=np.uint8
        )
    return mutated


def render(store: SequenceStore, substitutions: Sequence[Substitution],
           output_id: str, column_width: int = 70) -> str:
    """Render the mutated sequence as FASTA text wrapped at column_width."""
    if column_width < 1:
        raise InvalidConfiguration(f"Column width must be at least 1 (got {column_width})")
    text = apply_substitutions(store, substitutions).tobytes().decode("ascii")
    lines = [f">{output_id}"]
    lines.extend(text[i:i + column_width] for i in range(0, len(text), column_width))
    return "\n".join(lines) + "\n"


def render_ledger(substitutions: Sequence[Substitution]) -> List[List[object]]:
    """Ledger rows, header first."""
    rows: List[List[object]] = [list(LEDGER_HEADER)]
    rows.extend(s.to_csv_row() for s in substitutions)
    return rows


def _open_output(path: str, newline=None):
    try:
        return open(path, "w", newline=newline)
    except OSError as e:
        raise FileAccessError(f"Can't open file {path}: {e.strerror or e}") from e


def _remove_partial(paths: Sequence[str]) -> None:
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def write_outputs(fasta_path: str, fasta_text: str,
                  ledger_path: str, ledger_rows: Sequence[Sequence[object]]) -> None:
    """Write the mutated FASTA and the ledger, or neither.

    Both files are opened before anything is written. If either cannot be
    opened or written, every file created here is removed before the
    FileAccessError propagates.
    """
    created: List[str] = []
    try:
        with contextlib.ExitStack() as stack:
            fasta = stack.enter_context(_open_output(fasta_path))
            created.append(fasta_path)
            ledger = stack.enter_context(_open_output(ledger_path, newline=""))
            created.append(ledger_path)
            try:
                fasta.write(fasta_text)
                csv.writer(ledger, lineterminator="\n").writerows(ledger_rows)
            except OSError as e:
                raise FileAccessError(f"Can't write output files: {e.strerror or e}") from e
    except OSError as e:
        # Raised while flushing on close.
        _remove_partial(created)
        raise FileAccessError(f"Can't write output files: {e.strerror or e}") from e
    except FileAccessError:
        _remove_partial(created)
        raise


@dataclass
class DistributionReport:
    """SNP counts per equal-width bin, plus any spacing violations found."""
    length: int
    min_distance: int
    bin_ranges: List[Tuple[int, int]]
    counts: List[int]
    violations: List[Tuple[int, int, int]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts)

    def format_lines(self) -> List[str]:
        lines = ["Distribution of SNPs:"]
        for i, ((start, end), count) in enumerate(zip(self.bin_ranges, self.counts)):
            if start > end:
                # Sequence shorter than the bin count: this bin covers nothing.
                lines.append(f"Bin {i} ({'empty':>24}) \t: {count}")
            else:
                lines.append(f"Bin {i} ({start:10d} to {end:10d}) \t: {count}")
        return lines


def distribution(positions: Sequence[int], length: int, min_distance: int,
                 n_bins: int = 10) -> DistributionReport:
    """Bin positions over [0, length) and re-check the minimum spacing."""
    if length < 1:
        raise InvalidConfiguration(f"Sequence length must be at least 1 (got {length})")
    pos = np.asarray(positions, dtype=np.int64)

    # Bin i holds positions p with p * n_bins // length == i.
    bins = pos * n_bins // length
    counts = np.bincount(bins, minlength=n_bins) if pos.size else np.zeros(n_bins, dtype=np.int64)
    starts = [-(-i * length // n_bins) for i in range(n_bins + 1)]
    bin_ranges = [(starts[i], starts[i + 1] - 1) for i in range(n_bins)]

    ordered = np.sort(pos)
    gaps = np.diff(ordered)
    violations = [
        (int(ordered[i]), int(ordered[i + 1]), int(gaps[i]))
        for i in np.nonzero(gaps < min_distance)[0]
    ]
    return DistributionReport(length, min_distance, bin_ranges,
                              [int(c) for c in counts[:n_bins]], violations)


def warn_violations(report: DistributionReport, stream=None) -> None:
    stream = stream if stream is not None else sys.stderr
    for previous, nxt, gap in report.violations:
        print(f"WARNING: SNPs at {previous} and {nxt} are only {gap} bp apart "
              f"(minimum {report.min_distance})", file=stream, flush=True)
