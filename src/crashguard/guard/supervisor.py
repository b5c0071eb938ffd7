"""
Last-line-of-defence hooks for uncaught faults.

The supervisor routes faults from worker threads, the asyncio loop handler
and code run through ``call()`` into a FaultClassifier. Escalated faults go
to whatever handler was installed before, so default behaviour is unchanged
for anything unrecognised. The main-thread excepthook only runs once the
main thread has died, so it logs the classification and always delegates.
"""

import asyncio
import sys
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

from crashguard.guard.fault_classifier import FaultClassifier, Verdict
from crashguard.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Supervisor:
    """Installs and removes the uncaught-fault hooks."""

    def __init__(self, classifier: Optional[FaultClassifier] = None):
        self.classifier = classifier or FaultClassifier()
        self._installed = False
        self._prev_excepthook = None
        self._prev_threading_hook = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._prev_loop_handler = None

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Hook the interpreter, and ``loop`` when given. Safe to call twice."""
        if self._installed:
            return

        self._prev_excepthook = sys.excepthook
        self._prev_threading_hook = threading.excepthook
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_hook

        if loop is not None:
            self._loop = loop
            self._prev_loop_handler = loop.get_exception_handler()
            loop.set_exception_handler(self._loop_handler)

        self._installed = True
        logger.debug("Uncaught fault hooks installed")

    def uninstall(self) -> None:
        """Restore the handlers that were active before install()."""
        if not self._installed:
            return

        sys.excepthook = self._prev_excepthook
        threading.excepthook = self._prev_threading_hook
        if self._loop is not None and not self._loop.is_closed():
            self._loop.set_exception_handler(self._prev_loop_handler)

        self._loop = None
        self._prev_loop_handler = None
        self._installed = False
        logger.debug("Uncaught fault hooks removed")

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
        """
        Run ``fn`` under the classifier.

        Suppressed faults make this return None; anything else propagates.
        """
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            self.classifier.handle(e)
            return None

    # -- Hooks ---------------------------------------------------------------

    def _excepthook(self, exc_type, exc, tb) -> None:
        if exc is not None and self.classifier.classify(exc) is Verdict.SUPPRESS:
            logger.warning(
                f"Transient network error reached the main thread: {exc}"
            )
        self._prev_excepthook(exc_type, exc, tb)

    def _threading_hook(self, args) -> None:
        if args.exc_value is not None and self._suppressed(args.exc_value):
            return
        self._prev_threading_hook(args)

    def _loop_handler(
        self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]
    ) -> None:
        exc = context.get("exception")
        if exc is not None and self._suppressed(exc):
            return

        if self._prev_loop_handler is not None:
            self._prev_loop_handler(loop, context)
        else:
            loop.default_exception_handler(context)

    def _suppressed(self, exc: BaseException) -> bool:
        return self.classifier.handle(exc, reraise=False) is Verdict.SUPPRESS
