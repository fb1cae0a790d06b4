"""Tests for the Poller."""

from __future__ import annotations

import pytest

from qtransfer.core.exceptions import ReceiveError
from qtransfer.models.message import Message, QueueRef
from qtransfer.transfer.poller import Poller
from tests.fakes import MemoryQueueClient

SRC = "mem://source"


@pytest.fixture
def client():
    c = MemoryQueueClient()
    c.create_queue(SRC)
    return c


def test_batch_is_bounded_at_ten(client):
    for i in range(25):
        client.put(SRC, f"m{i}")
    result = Poller(client, QueueRef(url=SRC)).poll()
    assert result.ok
    assert len(result.batch) == 10


def test_respects_smaller_max_messages(client):
    for i in range(5):
        client.put(SRC, f"m{i}")
    result = Poller(client, QueueRef(url=SRC), max_messages=3).poll()
    assert [m.body for m in result.batch] == ["m0", "m1", "m2"]


def test_empty_queue_gives_empty_batch(client):
    result = Poller(client, QueueRef(url=SRC)).poll()
    assert result.ok
    assert result.batch == []


def test_receives_attributes(client):
    client.put(SRC, "x", attributes={"k": {"DataType": "String", "StringValue": "v"}},
               group_id="G1", deduplication_id="D1")
    [msg] = Poller(client, QueueRef(url=SRC)).poll().batch
    assert msg.attributes["k"]["StringValue"] == "v"
    assert msg.group_id == "G1"
    assert msg.receipt_handle


def test_receive_error_becomes_typed_result(client):
    client.fail_receive(SRC)
    result = Poller(client, QueueRef(url=SRC)).poll()
    assert not result.ok
    assert isinstance(result.error, ReceiveError)
    assert result.batch == []


def test_no_retry_on_error(client):
    client.fail_receive(SRC)
    Poller(client, QueueRef(url=SRC)).poll()
    assert len(client.calls_for("receive")) == 1


@pytest.mark.parametrize("max_messages", [0, 11])
def test_rejects_max_messages_out_of_bounds(client, max_messages):
    with pytest.raises(ValueError):
        Poller(client, QueueRef(url=SRC), max_messages=max_messages)


def test_oversized_batch_from_client_is_rejected():
    class Misbehaving:
        def receive(self, queue_url, max_messages=10, wait_seconds=0, with_attributes=True):
            return [Message(body=str(i), receipt_handle=str(i)) for i in range(11)]

    with pytest.raises(ValueError, match="exceeds"):
        Poller(Misbehaving(), QueueRef(url=SRC)).poll()


def test_passes_wait_time_to_client(client):
    seen = {}
    real_receive = client.receive

    def recording_receive(queue_url, **kwargs):
        seen.update(kwargs)
        return real_receive(queue_url, **kwargs)

    client.receive = recording_receive
    Poller(client, QueueRef(url=SRC), wait_seconds=5).poll()
    assert seen["wait_seconds"] == 5
    assert seen["with_attributes"] is True
