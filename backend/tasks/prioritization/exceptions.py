# tasks/prioritization/exceptions.py
"""Error taxonomy of the prioritization engine. None of these are retried here."""


class PrioritizationError(Exception):
    """Base class for every failure raised by the prioritization pipeline."""

    pass


class InputError(PrioritizationError):
    """Missing, contradictory or malformed selector/mode. Raised before any I/O."""

    pass


class UpstreamFetchError(PrioritizationError):
    """The task repository could not load the working set."""

    pass


class ComputeError(PrioritizationError):
    """Scoring failed. Malformed fields degrade to zero points instead."""

    pass


class PersistenceError(PrioritizationError):
    """The bulk priority write failed; no partial success is reported."""

    pass
