"""
Classifier for faults that escape every other handler.

The HTTP stack occasionally touches a TLS session after its connection
was torn down. Those failures surface as uncaught errors with no earlier
catch point, so they are recognised here by signature and swallowed.
Anything else escalates.
"""

import traceback
from enum import Enum
from typing import Iterable

from crashguard.logger import get_logger

logger = get_logger(__name__)

TRANSIENT_SIGNATURES = (
    "'NoneType' object has no attribute 'set_session'",
    "fetch failed",
)
DEPENDENCY_MARKER = "httpx"


class Verdict(str, Enum):
    SUPPRESS = "suppress"
    ESCALATE = "escalate"


class FaultClassifier:
    """
    Decides whether an uncaught fault is a known transient race.

    A fault is suppressed only when its message matches one of the known
    signatures AND its traceback passes through the dependency. A message
    match alone escalates.
    """

    def __init__(
        self,
        signatures: Iterable[str] = TRANSIENT_SIGNATURES,
        marker: str = DEPENDENCY_MARKER,
    ):
        self.signatures = tuple(signatures)
        self.marker = marker
        self._suppressed = 0

    @property
    def suppressed_count(self) -> int:
        return self._suppressed

    def classify(self, fault: BaseException) -> Verdict:
        message = str(fault)
        if not any(sig in message for sig in self.signatures):
            return Verdict.ESCALATE

        if not _passes_through(fault, self.marker):
            return Verdict.ESCALATE

        return Verdict.SUPPRESS

    def handle(self, fault: BaseException, reraise: bool = True) -> Verdict:
        """
        Suppress or escalate a fault.

        Args:
            fault: The uncaught exception.
            reraise: Raise escalated faults. Handlers that have their own
                fallback pass False and act on the returned verdict.

        Returns:
            The verdict. Escalated faults are raised when ``reraise`` is set.
        """
        verdict = self.classify(fault)

        if verdict is Verdict.SUPPRESS:
            self._suppressed += 1
            logger.warning(
                f"Suppressed transient network error #{self._suppressed}: {fault}"
            )
            return verdict

        if reraise:
            raise fault
        return verdict


def _passes_through(fault: BaseException, marker: str) -> bool:
    """
    True when a frame of the fault, or of an exception chained to it, runs
    in a file whose path contains ``marker``. Source lines are never read.
    """
    seen = set()
    current = fault
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for frame in traceback.extract_tb(current.__traceback__):
            if marker in frame.filename:
                return True
        current = current.__cause__ or current.__context__
    return False
