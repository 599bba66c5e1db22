"""
Tests for identifier delivery.
"""

import socket

from atis import ConsoleSink, UDPSink


class TestConsoleSink:

    def test_line_format(self, capsys):
        ConsoleSink().emit("123456789")
        assert capsys.readouterr().out == "ATIS: 123456789\n"


class TestUDPSink:
    """Test best-effort datagram delivery."""

    def test_datagram(self):
        receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(2.0)
        try:
            sink = UDPSink("127.0.0.1", receiver.getsockname()[1])
            sink("2111234567")

            assert receiver.recv(64) == b"2111234567\n"
            assert sink.datagrams_sent == 1
        finally:
            receiver.close()

    def test_unresolvable_host_ignored(self):
        sink = UDPSink("no-such-host.invalid", 5005)
        sink.emit("123456789")
        assert sink.datagrams_sent == 0

    def test_repr(self):
        assert repr(UDPSink("10.0.0.1", 5005)) == "UDPSink(10.0.0.1:5005)"
