"""
TLS session handling rules for outbound connections.

Session resumption is what exposes the teardown race, so networking code
takes a TLSSessionPolicy at construction time and routes session handling
through it instead of touching ``ssl`` directly.
"""

import ssl
import socket
from typing import Any, Dict, Optional

from crashguard.logger import get_logger

logger = get_logger(__name__)


class TLSSessionPolicy:
    """Null-safe session assignment and session stripping on connect."""

    def set_session(self, ssl_socket: Any, session: Optional[ssl.SSLSession]) -> None:
        """Assign ``session`` unless it is None or the socket lost its SSL object."""
        if session is None:
            return
        if getattr(ssl_socket, "_sslobj", None) is None:
            logger.debug("Skipping session assignment on a closed TLS socket")
            return
        ssl_socket.session = session

    @staticmethod
    def strip_session(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Return a copy of connect options without a reusable session."""
        options = dict(options or {})
        options.pop("session", None)
        return options

    def wrap_socket(
        self, context: ssl.SSLContext, sock: socket.socket, **options: Any
    ) -> ssl.SSLSocket:
        """Wrap ``sock`` with ``context``, never resuming an old session."""
        return context.wrap_socket(sock, **self.strip_session(options))
