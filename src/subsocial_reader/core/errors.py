"""Exceptions raised by the reader's collaborators.

Absence of a struct or content document is never an error; only a failed call
to a collaborator as a whole ends up here.
"""


class SubsocialReaderError(RuntimeError):
    """Base exception for collaborator failures."""


class StructSourceError(SubsocialReaderError):
    """Raised when the chain struct source cannot answer a batch request."""


class ContentStoreError(SubsocialReaderError):
    """Raised when the content store cannot answer a batch request."""
