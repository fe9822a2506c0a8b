from typing import Iterable, List

import numpy as np

from .errors import InternalError
from .models import ALPHABET, Substitution
from .sequence_store import SequenceStore


class MutationPlan:
    """Pick a replacement base for every sampled position.

    Replacements are drawn uniformly from A, C, G, T and redrawn until they
    differ from the reference base, so each of the three alternatives is
    equally likely.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def make_snp(self, reference: str) -> str:
        while True:
            new_base = ALPHABET[int(self.rng.integers(0, len(ALPHABET)))]
            if new_base != reference:
                return new_base

    def plan(self, store: SequenceStore, positions: Iterable[int]) -> List[Substitution]:
        """One Substitution per position, in ascending position order."""
        substitutions: List[Substitution] = []
        previous = -1
        for p in positions:
            p = int(p)
            if p <= previous:
                raise InternalError(f"SNP positions are not strictly ascending at {p}")
            reference = store[p]
            substitutions.append(Substitution(p, reference, self.make_snp(reference)))
            previous = p
        return substitutions
