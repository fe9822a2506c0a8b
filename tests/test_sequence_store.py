import os
import sys
import tempfile
import unittest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from makesnps.errors import FileAccessError, FormatError, InternalError
from makesnps.sequence_store import SequenceStore


class SequenceStoreTests(unittest.TestCase):
    def test_load_keeps_only_nucleotides_uppercased(self):
        store = SequenceStore.load(">chr1 test sequence\nacgT\nNNAC-G T\r\nx*t\n")
        self.assertEqual(store.to_string(), "ACGTACGTT")
        self.assertEqual(store.length, 9)
        self.assertEqual(len(store), 9)
        self.assertEqual(store.name, "chr1")

    def test_lookup(self):
        store = SequenceStore.load(">s\nACGTACGTAC\n")
        self.assertEqual(store[0], "A")
        self.assertEqual(store[3], "T")
        self.assertEqual(store[9], "C")

    def test_lookup_out_of_range_is_internal_error(self):
        store = SequenceStore.load(">s\nACGT\n")
        with self.assertRaises(InternalError):
            store[4]
        with self.assertRaises(InternalError):
            store[-1]

    def test_codes_are_read_only(self):
        store = SequenceStore.load(">s\nACGT\n")
        with self.assertRaises(ValueError):
            store.codes[0] = ord("T")

    def test_missing_header(self):
        with self.assertRaises(FormatError):
            SequenceStore.load("ACGTACGT\n")

    def test_empty_input(self):
        with self.assertRaises(FormatError):
            SequenceStore.load("")

    def test_second_record_rejected(self):
        with self.assertRaises(FormatError):
            SequenceStore.load(">one\nACGT\n>two\nACGT\n")

    def test_marker_inside_body_rejected(self):
        with self.assertRaises(FormatError):
            SequenceStore.load(">one\nAC>GT\n")

    def test_no_nucleotides(self):
        with self.assertRaises(FormatError):
            SequenceStore.load(">empty\nNNNN\n  \n")

    def test_non_ascii_characters_are_ignored(self):
        store = SequenceStore.load(">s\nACéGTÅ\n")
        self.assertEqual(store.to_string(), "ACGT")

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "ref.fa")
            with open(path, "w") as f:
                f.write(">ref\nACGTACGTAC\nGG\n")
            store = SequenceStore.from_file(path)
        self.assertEqual(store.to_string(), "ACGTACGTACGG")

    def test_from_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileAccessError):
                SequenceStore.from_file(os.path.join(tmp, "missing.fa"))


if __name__ == "__main__":
    unittest.main()
