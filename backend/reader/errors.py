from typing import Optional


class ReaderError(Exception):
    """Base class for every failure raised by the reading pipeline."""


class CorpusLoadError(ReaderError):
    """The local NKRV corpus could not be fetched or decoded."""


class RemoteFetchError(ReaderError):
    """The ESV proxy was unreachable or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PlanValidationError(ReaderError):
    """A reading reference could not be turned into a plan."""


class UnknownBookError(PlanValidationError):
    pass


class BookNotIndexedError(PlanValidationError):
    pass


class InvalidReferenceError(PlanValidationError):
    pass


class NoVersesFoundError(PlanValidationError):
    pass


class SegmentNotFoundError(PlanValidationError):
    pass
