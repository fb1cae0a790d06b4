"""Tests for the Forwarder and Acknowledger."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from qtransfer.models.message import OutboundMessage, QueueRef
from qtransfer.transfer.acknowledger import Acknowledger
from qtransfer.transfer.forwarder import Forwarder
from tests.fakes import MemoryQueueClient

SRC = "mem://source"
DEST = "mem://dest"


@pytest.fixture
def client():
    c = MemoryQueueClient()
    c.create_queue(SRC)
    c.create_queue(DEST)
    return c


class TestForwarder:
    def test_forward_sends_to_destination(self, client):
        ok = Forwarder(client).forward(OutboundMessage(queue_url=DEST, body="hello"))
        assert ok is True
        assert [m.body for m in client.messages(DEST)] == ["hello"]

    def test_forward_failure_is_logged_not_raised(self, client):
        client.fail_send("hello")
        with capture_logs() as logs:
            ok = Forwarder(client).forward(OutboundMessage(queue_url=DEST, body="hello"))
        assert ok is False
        assert client.messages(DEST) == []
        assert [e["event"] for e in logs] == ["send failed"]
        assert logs[0]["log_level"] == "error"

    def test_failure_log_carries_source_message_id(self, client):
        client.fail_send("hello")
        with capture_logs() as logs:
            Forwarder(client).forward(OutboundMessage(queue_url=DEST, body="hello"), message_id="m-1")
        assert logs[0]["message_id"] == "m-1"
        assert logs[0]["queue"] == DEST

    def test_single_attempt(self, client):
        client.fail_send("hello", times=5)
        Forwarder(client).forward(OutboundMessage(queue_url=DEST, body="hello"))
        assert len(client.calls_for("send")) == 1


class TestAcknowledger:
    def test_acknowledge_deletes_in_flight_message(self, client):
        client.put(SRC, "x")
        [msg] = client.receive(SRC)
        assert Acknowledger(client, QueueRef(url=SRC)).acknowledge(msg) is True
        assert client.in_flight(SRC) == []
        assert client.messages(SRC) == []

    def test_delete_failure_leaves_message_on_source(self, client):
        client.put(SRC, "x")
        [msg] = client.receive(SRC)
        client.fail_delete("x")
        with capture_logs() as logs:
            ok = Acknowledger(client, QueueRef(url=SRC)).acknowledge(msg)
        assert ok is False
        assert len(client.in_flight(SRC)) == 1
        assert logs[0]["event"] == "delete failed"
        assert logs[0]["receipt_handle"] == msg.receipt_handle

    def test_stale_receipt_handle_fails(self, client):
        client.put(SRC, "x")
        [msg] = client.receive(SRC)
        client.redeliver(SRC)
        with capture_logs():
            assert Acknowledger(client, QueueRef(url=SRC)).acknowledge(msg) is False
        assert [m.body for m in client.messages(SRC)] == ["x"]
