"""Mini README: Tests for the local store and the remote sync client.

Structure:
    * JsonFileLedgerStore - round trip through disk and corrupt file recovery.
    * RemoteSyncClient - push/pull against ``httpx.MockTransport`` including
      the short-key guard and non-fatal failures.
"""

from __future__ import annotations

import json

import httpx
import pytest

from dailybudget.budget import PeriodManager, add_expense, new_ledger
from dailybudget.storage import JsonFileLedgerStore, RemoteSyncClient


def _client(handler) -> RemoteSyncClient:
    return RemoteSyncClient(
        "https://kv.example.test/",
        timeout=1.0,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_json_store_round_trip(tmp_path) -> None:
    store = JsonFileLedgerStore(tmp_path)
    ledger = add_expense(new_ledger(2024, 7), 4, 19.99, "Books")

    assert store.save(ledger.key, ledger) is True
    assert (tmp_path / "2024-07.json").exists()
    assert store.load("2024-07") == ledger
    assert store.load("2024-08") is None


def test_json_store_treats_undecodable_bytes_as_missing(tmp_path) -> None:
    (tmp_path / "2024-07.json").write_bytes(b"\xff\xfe\x00garbage\x80")
    store = JsonFileLedgerStore(tmp_path)

    assert store.load("2024-07") is None
    ledger = PeriodManager(store).open_period(2024, 7, 30.0)
    assert ledger == new_ledger(2024, 7)
    assert store.load("2024-07") == ledger


def test_json_store_treats_corrupt_file_as_missing(tmp_path) -> None:
    (tmp_path / "2024-07.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "2024-08.json").write_text(json.dumps({"year": 2024}), encoding="utf-8")
    store = JsonFileLedgerStore(tmp_path)

    assert store.load("2024-07") is None
    assert store.load("2024-08") is None


def test_sync_push_posts_serialised_ledger() -> None:
    received = {}

    def handler(request: httpx.Request) -> httpx.Response:
        received["url"] = str(request.url)
        received["body"] = json.loads(request.content)
        return httpx.Response(200)

    ledger = add_expense(new_ledger(2024, 7), 1, 5.0)

    assert _client(handler).push("family-budget", ledger) is True
    assert received["url"] == "https://kv.example.test/family-budget"
    assert received["body"] == ledger.as_dict()


def test_sync_pull_returns_remote_ledger() -> None:
    ledger = add_expense(new_ledger(2024, 7), 1, 5.0)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=ledger.as_dict())

    assert _client(handler).pull("family-budget") == ledger


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, text=""),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, content=b"\x80\x81abc"),
        httpx.Response(200, json={"year": 2024, "month": 7, "days": []}),
    ],
)
def test_sync_pull_yields_none_for_unusable_responses(response) -> None:
    assert _client(lambda request: response).pull("family-budget") is None


def test_sync_failures_are_not_fatal() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = _client(handler)
    ledger = new_ledger(2024, 7)

    assert client.push("family-budget", ledger) is False
    assert client.pull("family-budget") is None
    assert _client(lambda request: httpx.Response(500)).push("family-budget", ledger) is False


def test_sync_rejects_short_keys_without_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("no request expected")

    client = _client(handler)

    assert client.push("ab", new_ledger(2024, 7)) is False
    assert client.pull("") is None
