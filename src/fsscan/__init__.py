"""fsscan — filesystem scanner reporting entry types, sizes and search matches."""

__version__ = "0.1.0"


class FssError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and other
    input errors that stop a run before or during the scan. The
    message is printed to stderr and the process exits with code 1.
    """


class UnclassifiableEntryError(FssError):
    """An entry's type could not be determined while in strict mode."""
