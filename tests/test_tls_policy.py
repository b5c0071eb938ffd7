"""Tests for TLSSessionPolicy."""

import ssl
from unittest.mock import MagicMock, Mock

from crashguard.guard.tls_policy import TLSSessionPolicy


class TestSetSession:
    def test_none_session_is_ignored(self):
        sock = Mock(spec=["_sslobj", "session"])
        sock._sslobj = object()
        sock.session = "original"

        TLSSessionPolicy().set_session(sock, None)

        assert sock.session == "original"

    def test_closed_socket_is_ignored(self):
        sock = Mock(spec=["_sslobj", "session"])
        sock._sslobj = None
        sock.session = "original"
        session = Mock(spec=ssl.SSLSession)

        TLSSessionPolicy().set_session(sock, session)

        assert sock.session == "original"

    def test_live_socket_gets_session(self):
        sock = Mock(spec=["_sslobj", "session"])
        sock._sslobj = object()
        session = Mock(spec=ssl.SSLSession)

        TLSSessionPolicy().set_session(sock, session)

        assert sock.session is session


class TestStripSession:
    def test_removes_session_without_mutating_input(self):
        options = {"server_hostname": "api.example.com", "session": object()}
        stripped = TLSSessionPolicy.strip_session(options)

        assert stripped == {"server_hostname": "api.example.com"}
        assert "session" in options

    def test_none_options(self):
        assert TLSSessionPolicy.strip_session(None) == {}

    def test_wrap_socket_delegates_without_session(self):
        context = MagicMock(spec=ssl.SSLContext)
        sock = Mock()

        TLSSessionPolicy().wrap_socket(
            context, sock, server_hostname="api.example.com", session=object()
        )

        context.wrap_socket.assert_called_once_with(
            sock, server_hostname="api.example.com"
        )
