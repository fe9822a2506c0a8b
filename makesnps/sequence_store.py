import numpy as np

from .errors import FileAccessError, FormatError, InternalError
from .models import ALPHABET

ALPHABET_CODES = np.frombuffer("".join(ALPHABET).encode("ascii"), dtype=np.uint8)


class SequenceStore:
    """Read-only holder for a single reference sequence.

    The sequence is kept as a uint8 array of upper-case ASCII codes, one per
    nucleotide, so that lookups and copies stay cheap for whole genomes.
    """

    def __init__(self, codes: np.ndarray, name: str = ""):
        codes = np.asarray(codes, dtype=np.uint8).copy()
        codes.flags.writeable = False
        self._codes = codes
        self.name = name

    @classmethod
    def load(cls, raw_text: str) -> "SequenceStore":
        """Parse single-record FASTA text.

        Only A, C, G and T (either case) are kept from the body; whitespace and
        any other character are dropped, so the source may be wrapped at any
        width.
        """
        if not raw_text:
            raise FormatError("Couldn't get header line.")
        if raw_text[0] != ">":
            raise FormatError("File should begin with FASTA header.")

        header, _, body = raw_text.partition("\n")
        if ">" in body:
            raise FormatError("File should only have 1 sequence in it.")

        words = header[1:].split()
        name = words[0] if words else ""

        # bytes.upper() only touches ASCII, so multi-byte characters never
        # turn into nucleotides.
        raw = np.frombuffer(body.encode("utf-8").upper(), dtype=np.uint8)
        codes = raw[np.isin(raw, ALPHABET_CODES)]
        if codes.size == 0:
            raise FormatError("Reference contains no nucleotides.")
        return cls(codes, name=name)

    @classmethod
    def from_file(cls, path: str) -> "SequenceStore":
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                raw_text = f.read()
        except OSError as e:
            raise FileAccessError(f"Can't open reference {path}: {e.strerror or e}") from e
        return cls.load(raw_text)

    @property
    def length(self) -> int:
        return int(self._codes.size)

    @property
    def codes(self) -> np.ndarray:
        return self._codes

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, position: int) -> str:
        if not 0 <= position < self.length:
            raise InternalError(f"Position {position} outside sequence of length {self.length}")
        return chr(self._codes[position])

    def to_string(self) -> str:
        return self._codes.tobytes().decode("ascii")
