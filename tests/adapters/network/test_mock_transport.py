from __future__ import annotations

import asyncio

import pytest

from woosync.adapters.network import MissingFixtureError, MockTransport, NetworkError
from woosync.domain.ports import HTTPMethod, RemoteRequest


def _get(path: str, parameters: dict[str, object] | None = None) -> RemoteRequest:
    return RemoteRequest(site_id=1, method=HTTPMethod.GET, path=path, parameters=parameters)


def test_serves_fixture_file_by_suffix(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", filename="shipment_tracking_multiple")

    body = asyncio.run(network.execute(_get("orders/963/shipment-trackings/")))

    assert b"345645674567" in body
    assert [request.path for request in network.requests] == ["orders/963/shipment-trackings/"]


def test_longest_suffix_wins(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", content="[]")
    network.simulate_response("shipment-trackings/providers", content="{}")

    body = asyncio.run(network.execute(_get("orders/963/shipment-trackings/providers")))

    assert body == b"{}"


def test_suffix_may_include_query(network: MockTransport) -> None:
    network.simulate_response("print?paper_size=label", content='{"ok": true}')

    body = asyncio.run(network.execute(_get("label/print", {"paper_size": "label"})))

    assert body == b'{"ok": true}'


def test_once_responses_are_consumed_in_order(network: MockTransport) -> None:
    network.simulate_response("orders/1", content="first", once=True)
    network.simulate_response("orders/1", content="second", once=True)
    network.simulate_response("orders/1", content="always")

    bodies = [asyncio.run(network.execute(_get("orders/1"))) for _ in range(3)]

    assert bodies == [b"first", b"second", b"always"]


def test_simulated_error_is_raised(network: MockTransport) -> None:
    network.simulate_error("orders/1", NetworkError("offline"))

    with pytest.raises(NetworkError):
        asyncio.run(network.execute(_get("orders/1")))


def test_unmatched_request_fails_loudly(network: MockTransport) -> None:
    network.simulate_response("refunds", content="[]")

    with pytest.raises(MissingFixtureError) as exc:
        asyncio.run(network.execute(_get("orders/1")))

    assert "orders/1" in str(exc.value)


def test_missing_fixture_file_is_reported(network: MockTransport) -> None:
    network.simulate_response("orders/1", filename="does-not-exist")

    with pytest.raises(MissingFixtureError):
        asyncio.run(network.execute(_get("orders/1")))


def test_remove_all_simulated_responses(network: MockTransport) -> None:
    network.simulate_response("orders/1", content="{}")
    asyncio.run(network.execute(_get("orders/1")))

    network.remove_all_simulated_responses()

    assert network.requests == []
    with pytest.raises(MissingFixtureError):
        asyncio.run(network.execute(_get("orders/1")))


def test_simulate_response_requires_one_source() -> None:
    transport = MockTransport()

    with pytest.raises(ValueError):
        transport.simulate_response("orders/1")
