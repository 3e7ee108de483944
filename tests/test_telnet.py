"""Tests for reply framing and the hub TCP session."""

from __future__ import annotations

import socket
import socketserver
import threading

import pytest

from irrack.errors import TransportError
from irrack.transport.telnet import TelnetTransport, read_response

HUB_REPLIES = {
    'hubQuery="hub version"': "RedRatHub (V4.28), irNetBox (V1.0)\r\n",
    'hubQuery="list datasets"': "{\r\nSKY\r\nCOMCAST\r\n}\r\n",
    'hardwareQuery="firmware version" ip="10.0.0.1"': "1.4.2\r\n",
    "BAD": "Failed to find signal BAD\r\n",
}


class HubHandler(socketserver.StreamRequestHandler):
    def handle(self):
        for raw in self.rfile:
            command = raw.decode().strip()
            if command == "QUIT":
                return
            self.wfile.write(HUB_REPLIES.get(command, "OK\r\n").encode())


@pytest.fixture
def hub_server():
    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), HubHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server.server_address
    server.shutdown()
    server.server_close()


def test_line_terminator_reads_exactly_one_line():
    lines = iter(["{", "SKY", "}"])

    assert read_response(lines, "LINE") == "{"
    assert next(lines) == "SKY"


def test_ok_ends_reply():
    lines = iter(["OK", "extra"])
    assert read_response(lines) == "OK"
    assert next(lines) == "extra"


def test_block_reply_runs_to_closing_brace():
    lines = iter(["{", "[irNetBox] (00-11) at 10.0.0.1 (Connected)", "}", "after"])

    assert read_response(lines, "}") == "{\n[irNetBox] (00-11) at 10.0.0.1 (Connected)\n}"
    assert next(lines) == "after"


def test_empty_block_on_one_line():
    assert read_response(iter(["{}", "after"])) == "{}"


def test_parenthesis_and_failure_end_reply():
    assert read_response(iter(["RedRatHub (V4.28)", "x"])) == "RedRatHub (V4.28)"
    assert read_response(iter(["Failed to find signal", "x"])) == "Failed to find signal"


def test_no_lines_is_none():
    assert read_response(iter([])) is None


def test_send_command_round_trip(hub_server):
    host, port = hub_server
    transport = TelnetTransport(host, port, read_timeout=2.0, instance_id=1)
    transport.connect()
    try:
        assert transport.send_command('ip="10.0.0.1" dataset="SKY" signal="OK" output="1"') == "OK"
        assert transport.send_command('hubQuery="list datasets"', "}") == "{\nSKY\nCOMCAST\n}"
        assert transport.send_command('hubQuery="hub version"', ")") == (
            "RedRatHub (V4.28), irNetBox (V1.0)"
        )
        assert (
            transport.send_command('hardwareQuery="firmware version" ip="10.0.0.1"', "LINE")
            == "1.4.2"
        )
        assert transport.send_command("BAD") == "Failed to find signal BAD"
        assert transport.requests == 5
    finally:
        transport.close()


def test_hub_hangup_closes_transport(hub_server):
    host, port = hub_server
    transport = TelnetTransport(host, port, read_timeout=2.0)
    transport.connect()

    with pytest.raises(TransportError):
        transport.send_command("QUIT")
    assert not transport.connected


def test_send_without_connection_fails():
    transport = TelnetTransport("127.0.0.1", 1)
    with pytest.raises(TransportError):
        transport.send_command("anything")


def test_connect_refused():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    transport = TelnetTransport("127.0.0.1", port, read_timeout=1.0)
    with pytest.raises(TransportError):
        transport.connect()
    assert not transport.connected


def test_close_is_idempotent(hub_server):
    host, port = hub_server
    transport = TelnetTransport(host, port, read_timeout=2.0)
    transport.connect()
    transport.close()
    transport.close()
    assert not transport.connected


def test_session_without_reader_is_not_connected():
    near, far = socket.socketpair()
    transport = TelnetTransport("127.0.0.1", 1)
    transport._sock = near
    try:
        with pytest.raises(TransportError):
            transport.send_command("anything")
        assert transport.requests == 0
    finally:
        near.close()
        far.close()
