import os
import sys
import unittest

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from makesnps.errors import InternalError
from makesnps.models import ALPHABET, Substitution
from makesnps.mutation import MutationPlan
from makesnps.sampler import sample_positions
from makesnps.sequence_store import SequenceStore
from tests.helpers import ScriptedRng


class MutationPlanTests(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(11)
        bases = rng.choice(list(ALPHABET), size=20000)
        self.store = SequenceStore.load(">random\n" + "".join(bases) + "\n")

    def test_replacement_always_differs(self):
        rng = np.random.default_rng(3)
        positions = sample_positions(self.store.length, 2000, 5, rng)
        substitutions = MutationPlan(rng).plan(self.store, positions)
        self.assertEqual(len(substitutions), 2000)
        for s in substitutions:
            self.assertEqual(s.reference, self.store[s.position])
            self.assertNotEqual(s.snp, s.reference)
            self.assertIn(s.snp, ALPHABET)

    def test_order_follows_positions(self):
        positions = [3, 10, 400, 19999]
        substitutions = MutationPlan(np.random.default_rng(0)).plan(self.store, positions)
        self.assertEqual([s.position for s in substitutions], positions)

    def test_redraws_until_different(self):
        store = SequenceStore.load(">s\nAAAA\n")
        rng = ScriptedRng([0, 0, 2])
        substitutions = MutationPlan(rng).plan(store, [1])
        self.assertEqual(substitutions, [Substitution(1, "A", "G")])
        self.assertEqual(rng.calls, 3)

    def test_all_alternatives_reachable(self):
        plan = MutationPlan(np.random.default_rng(5))
        seen = {plan.make_snp("C") for _ in range(200)}
        self.assertEqual(seen, {"A", "G", "T"})

    def test_empty_positions(self):
        self.assertEqual(MutationPlan(np.random.default_rng(0)).plan(self.store, []), [])

    def test_out_of_range_position(self):
        with self.assertRaises(InternalError):
            MutationPlan(np.random.default_rng(0)).plan(self.store, [20000])

    def test_unsorted_positions(self):
        with self.assertRaises(InternalError):
            MutationPlan(np.random.default_rng(0)).plan(self.store, [10, 5])


if __name__ == "__main__":
    unittest.main()
