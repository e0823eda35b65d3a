from __future__ import annotations

import httpx

from voidsync.mind import LocalMemory, Mind, VoidClient
from voidsync.schemas import SyncPayload

ENDPOINT = 'http://testserver/api/void'


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_push_reports_success_on_2xx():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={'success': True})

    ok = VoidClient(ENDPOINT, client=_client(handler)).push(SyncPayload(role='sender', timestamp=1))
    assert ok is True
    assert seen[0].method == 'POST'
    assert b'"role":"sender"' in seen[0].content.replace(b' ', b'')


def test_push_swallows_non_success():
    client = VoidClient(ENDPOINT, client=_client(lambda r: httpx.Response(503, text='down')))
    assert client.push(SyncPayload()) is False


def test_push_swallows_transport_errors():
    def handler(request):
        raise httpx.ConnectError('refused', request=request)

    assert VoidClient(ENDPOINT, client=_client(handler)).push(SyncPayload()) is False


def test_pull_returns_document():
    client = VoidClient(ENDPOINT, client=_client(lambda r: httpx.Response(200, json={'timestamp': 9})))
    assert client.pull() == {'timestamp': 9}


def test_pull_rejects_non_json_and_non_object():
    assert VoidClient(ENDPOINT, client=_client(lambda r: httpx.Response(200, text='<html>'))).pull() is None
    assert VoidClient(ENDPOINT, client=_client(lambda r: httpx.Response(200, json=[1]))).pull() is None
    assert VoidClient(ENDPOINT, client=_client(lambda r: httpx.Response(500, json={'error': 'x'}))).pull() is None


def test_sender_to_receiver_through_the_void(client, clock):
    sender = Mind('scout', memory=LocalMemory(), clock=clock, client=VoidClient(ENDPOINT, client=client))
    receiver = Mind('primary', memory=LocalMemory(), clock=clock, client=VoidClient(ENDPOINT, client=client))

    for _ in range(3):
        sender.sense('touch', {'type': 'click'})
    receiver.sense('touch', {'type': 'click'})
    receiver.sense('movement', 'scroll')

    assert sender.push_state() is True
    stored = client.get('/api/void').json()
    assert stored['role'] == 'sender'
    assert len(stored['consciousness']) == 3

    assert receiver.pull_state() is True
    assert receiver.patterns.get('touch_9').count == 4
    assert receiver.patterns.get('movement_9').count == 1

    # Nothing new in the void: a second pull is gated by the timestamp.
    assert receiver.pull_state() is False
    assert receiver.patterns.get('touch_9').count == 4

    clock.advance(seconds=30)
    assert sender.push_state() is True
    assert receiver.pull_state() is True
    assert receiver.patterns.get('touch_9').count == 7


def test_receiver_adopts_unknown_patterns_wholesale(client, clock):
    sender = Mind('sender', memory=LocalMemory(), clock=clock, client=VoidClient(ENDPOINT, client=client))
    receiver = Mind('receiver', memory=LocalMemory(), clock=clock, client=VoidClient(ENDPOINT, client=client))
    sender.sense('motion', None)
    sender.push_state()
    receiver.pull_state()
    assert receiver.patterns.get('motion_9').model_dump() == sender.patterns.get('motion_9').model_dump()


def test_clear_empties_the_void(client):
    client.post('/api/void', json={'role': 'sender', 'timestamp': 3})
    assert VoidClient(ENDPOINT, client=client).clear() is True
    assert client.get('/api/void').json()['message'] == 'Void is empty'
