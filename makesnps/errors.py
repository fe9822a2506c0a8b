"""Exceptions raised by makesnps. Every one of them aborts the run."""


class MakeSnpsError(Exception):
    """Base class for all makesnps errors."""


class ConfigurationError(MakeSnpsError):
    """Run parameters are missing or out of range."""


class InvalidConfiguration(ConfigurationError):
    """A component was handed arguments it cannot work with (e.g. L = 0)."""


class FormatError(MakeSnpsError):
    """The reference is not a usable single-record FASTA file."""


class FileAccessError(MakeSnpsError):
    """An input could not be read or an output could not be written."""


class InfeasibleConfiguration(MakeSnpsError):
    """The requested number of SNPs cannot be placed with the required spacing."""


class InternalError(MakeSnpsError):
    """An internal invariant was broken."""
