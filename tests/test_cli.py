"""
Tests for the command line tools.
"""

import socket

import numpy as np
import pytest
from click.testing import CliRunner

from atis import ATISEncoder
from cli import decode, encode


@pytest.fixture
def receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


class TestDecodeCLI:
    """Test atis-decode."""

    def test_missing_destination(self):
        result = CliRunner().invoke(decode.main, [])
        assert result.exit_code == 2

    def test_missing_port(self):
        result = CliRunner().invoke(decode.main, ["127.0.0.1"])
        assert result.exit_code == 2

    def test_invalid_port(self):
        result = CliRunner().invoke(decode.main, ["127.0.0.1", "99999"])
        assert result.exit_code == 2

    def test_stdin(self, receiver):
        port = receiver.getsockname()[1]
        pcm = ATISEncoder().generate_pcm16("2111234567").astype("<i2").tobytes()

        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port)], input=pcm)

        assert result.exit_code == 0
        assert "ATIS: 2111234567" in result.output
        assert receiver.recv(64) == b"2111234567\n"

    def test_stdin_odd_trailing_byte(self, receiver):
        port = receiver.getsockname()[1]
        pcm = ATISEncoder().generate_pcm16("123456789").astype("<i2").tobytes() + b"\x01"

        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port)], input=pcm)

        assert result.exit_code == 0
        assert "ATIS: 123456789" in result.output

    def test_empty_stdin(self, receiver):
        port = receiver.getsockname()[1]
        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port)], input=b"")
        assert result.exit_code == 0
        assert "ATIS:" not in result.output

    def test_file(self, receiver, tmp_path):
        port = receiver.getsockname()[1]
        path = tmp_path / "burst.wav"
        ATISEncoder().generate_to_file(path, "316001234")

        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port), "-i", str(path)])

        assert result.exit_code == 0
        assert "ATIS: 316001234" in result.output
        assert receiver.recv(64) == b"316001234\n"

    def test_file_without_bursts(self, receiver, tmp_path):
        import soundfile as sf

        port = receiver.getsockname()[1]
        path = tmp_path / "silence.wav"
        sf.write(str(path), np.zeros(24000), 24000, subtype="PCM_16")

        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port), "-i", str(path)])
        assert result.exit_code == 1

    def test_file_wrong_rate(self, receiver, tmp_path):
        import soundfile as sf

        port = receiver.getsockname()[1]
        path = tmp_path / "wrong.wav"
        sf.write(str(path), np.zeros(4800), 48000, subtype="PCM_16")

        result = CliRunner().invoke(decode.main, ["127.0.0.1", str(port), "-i", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_list_devices(self, monkeypatch):
        monkeypatch.setattr(decode, "list_input_devices", lambda: [(3, "Test Mic")])

        result = CliRunner().invoke(decode.main, ["--list-devices"])

        assert result.exit_code == 0
        assert "[3] Test Mic" in result.output


class TestEncodeCLI:
    """Test atis-encode."""

    def test_raw_pipes_into_decoder(self, receiver):
        runner = CliRunner()
        encoded = runner.invoke(encode.main, ["9211234567", "--raw"])
        assert encoded.exit_code == 0

        port = receiver.getsockname()[1]
        result = runner.invoke(decode.main, ["127.0.0.1", str(port)], input=encoded.stdout_bytes)

        assert "ATIS: 9211234567" in result.output

    def test_file(self, tmp_path):
        path = tmp_path / "out.wav"
        result = CliRunner().invoke(encode.main, ["123456789", "-o", str(path)])

        assert result.exit_code == 0
        assert path.exists()

    def test_invalid_identifier(self):
        result = CliRunner().invoke(encode.main, ["12AB", "--raw"])
        assert result.exit_code == 1
