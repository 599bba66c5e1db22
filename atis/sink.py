"""
Delivery of decoded identifiers.
"""

import logging
import socket

import click

_logger = logging.getLogger(__name__)


class ConsoleSink:
    """Prints one "ATIS: <digits>" line per identifier."""

    def emit(self, identifier: str):
        click.echo(f"ATIS: {identifier}")

    __call__ = emit


class UDPSink:
    """
    Best-effort UDP sender.

    Sends each identifier as one datagram "<digits>\\n". Delivery failures
    are logged at debug level and otherwise ignored.
    """

    def __init__(self, address: str = "127.0.0.1", port: int = 5005):
        """
        Initialize UDP sink.

        Args:
            address: Destination IP address or hostname
            port: Destination UDP port
        """
        self.address = address
        self.port = port
        self.datagrams_sent = 0

    def emit(self, identifier: str):
        """
        Send an identifier.

        Args:
            identifier: Decoded digit string
        """
        payload = f"{identifier}\n".encode("ascii")
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.sendto(payload, (self.address, self.port))
            self.datagrams_sent += 1
        except OSError as e:
            _logger.debug(f"UDP send to {self.address}:{self.port} failed: {e}")

    __call__ = emit

    def __repr__(self) -> str:
        return f"UDPSink({self.address}:{self.port})"
