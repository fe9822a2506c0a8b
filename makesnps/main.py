import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .errors import ConfigurationError, MakeSnpsError
from .models import DEFAULT_ID, MAX_SNPS, RunConfig, Substitution
from .mutation import MutationPlan
from .report import distribution, render, render_ledger, warn_violations, write_outputs
from .sampler import PositionSampler
from .sequence_store import SequenceStore


@dataclass
class RunResult:
    reference: SequenceStore
    positions: np.ndarray
    substitutions: List[Substitution]
    seed: Optional[int]


def make_rng(seed: Optional[int]):
    """Return (generator, seed); a fresh seed is drawn when none is given."""
    if seed is None:
        seed = int(np.random.SeedSequence().generate_state(1)[0])
    return np.random.default_rng(seed), seed


def run(config: RunConfig, rng: Optional[np.random.Generator] = None) -> RunResult:
    """Load, sample, mutate and write both output files for one configuration."""
    config.validate()
    seed = config.seed
    if rng is None:
        rng, seed = make_rng(config.seed)

    if config.verbose:
        for line in config.parameter_lines():
            print(line)
        print(flush=True)

    reference = SequenceStore.from_file(config.input_path)
    if reference.name:
        print(f"Reference read... {reference.name}: {reference.length} nucleotides.", flush=True)
    else:
        print(f"Reference read... {reference.length} nucleotides.", flush=True)

    print("Making SNPs...", flush=True)
    sampler = PositionSampler(reference.length, config.min_distance, rng)
    positions = sampler.sample(config.count)
    if config.verbose and sampler.restarts:
        print(f"  Sampling restarted {sampler.restarts} times after jamming", flush=True)

    report = distribution(positions, reference.length, config.min_distance)
    if config.verbose:
        for line in report.format_lines():
            print(line)
    warn_violations(report)

    substitutions = MutationPlan(rng).plan(reference, positions)

    print("Writing output files...", flush=True)
    write_outputs(config.output_path,
                  render(reference, substitutions, config.output_id, config.column_width),
                  config.ledger_path, render_ledger(substitutions))

    return RunResult(reference, positions, substitutions, seed)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="makesnps",
        description="makesnps - create copy of genome with SNPs inserted."
    )
    parser.add_argument("--input", "-i", required=True,
                        help="Reference genome in FASTA format (single sequence)")
    parser.add_argument("--output", "-o", required=True, help="Output FASTA file")
    parser.add_argument("--ledger", "-c", required=True,
                        help="CSV file to write SNP positions to")
    parser.add_argument("--id", "-s", dest="output_id", default=DEFAULT_ID,
                        help=f"Output sequence id (default: {DEFAULT_ID})")
    parser.add_argument("--count", "-n", type=int, default=1000,
                        help=f"Number of SNPs to insert, 1 to {MAX_SNPS} (default: 1000)")
    parser.add_argument("--min-distance", "-m", type=int, default=100,
                        help="Minimum distance between SNPs (default: 100)")
    parser.add_argument("--column-width", "-w", type=int, default=70,
                        help="Column width of the output file (default: 70)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed, for reproducible output (default: random)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show parameters and the SNP distribution")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = RunConfig(
        input_path=args.input,
        output_path=args.output,
        ledger_path=args.ledger,
        output_id=args.output_id,
        count=args.count,
        min_distance=args.min_distance,
        column_width=args.column_width,
        seed=args.seed,
        verbose=args.verbose,
    )
    try:
        config.validate()
    except ConfigurationError as e:
        parser.error(str(e))

    print("\nmakesnps - create copy of genome with SNPs inserted.\n", flush=True)
    try:
        result = run(config)
    except MakeSnpsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"SNPs written to {config.ledger_path} (seed {result.seed})")
    print(f"Results written to {config.output_path}")
    print("Finished.")
    return 0


if __name__ == "__main__":
    main()
