"""
Build errors

Every error in the build is fatal. Errors are raised where the failure
happens, propagate unchanged through recursive resolution, and are only
caught by the command line driver, which reports them and exits.
"""

from typing import List, Sequence, Tuple


class RayonixError(Exception):
    """Base class for all fatal rayonix build errors"""


class ImportResolutionError(RayonixError):
    """
    A local import could not be opened by any of the fallback tiers

    Attributes:
        argument: Import argument as written (after slash normalization)
        context: File containing the directive
        attempts: (candidate path, reason) for every tier tried, in order
    """

    def __init__(self, argument: str, context: str, attempts: Sequence[Tuple[str, str]]):
        self.argument = argument
        self.context = context
        self.attempts: List[Tuple[str, str]] = list(attempts)
        super().__init__(f"Cannot resolve import '{argument}' from {context}")

    def trail_format(self) -> List[str]:
        """One diagnostic line per failed attempt"""
        return [f"  tried {path!r}: {reason}" for path, reason in self.attempts]


class ImportCycleError(RayonixError):
    """An import chain revisited a file that is still being expanded"""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__("Import cycle detected: " + " -> ".join(self.chain))


class MetaFetchError(RayonixError):
    """A meta fetch failed at the transport level or returned a non-success status"""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot fetch meta '{url}': {reason}")


class OutputWriteError(RayonixError):
    """The assembled document could not be written"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write output '{path}': {reason}")


class ProjectInitError(RayonixError):
    """A new project skeleton could not be created"""


class SourceReadError(RayonixError):
    """The entry file could not be read"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read entry file '{path}': {reason}")
