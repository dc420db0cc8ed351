import asyncio
import json
import logging
from collections import Counter
import requests
from services.cleaner_service import clean_megaverse
from conftest import FakeResponse


def test_clean_issues_2700_deletions(make_client, caplog):
    client = make_client()

    with caplog.at_level(logging.INFO):
        summary = asyncio.run(clean_megaverse(client))

    calls = client.session.calls
    assert len(calls) == 2700
    assert all(c["method"] == "DELETE" for c in calls)
    assert Counter(c["url"].rsplit("/", 1)[1] for c in calls) == {
        "polyanets": 900, "soloons": 900, "comeths": 900,
    }
    cells = {(json.loads(c["data"])["row"], json.loads(c["data"])["column"]) for c in calls}
    assert len(cells) == 900
    assert summary.attempted == 2700
    assert "Megaverse completely cleaned." in caplog.text


def test_clean_completes_despite_failures(make_client, caplog):
    client = make_client({
        ("DELETE", "http://megaverse.test/api/soloons"): FakeResponse(500),
        ("DELETE", "http://megaverse.test/api/comeths"): requests.ConnectionError("reset"),
    })

    with caplog.at_level(logging.INFO):
        summary = asyncio.run(clean_megaverse(client))

    assert summary.attempted == 2700
    assert summary.succeeded == 900
    assert summary.failed == 1800
    assert caplog.text.count("Megaverse completely cleaned.") == 1


def test_clean_respects_grid_size_and_cap(make_client):
    client = make_client(grid_size=4, max_concurrency=3)
    summary = asyncio.run(clean_megaverse(client))
    assert len(client.session.calls) == 4 * 4 * 3
    assert summary.succeeded == 48


def track_deletions(client, monkeypatch):
    state = {"in_flight": 0, "peak": 0}

    async def tracked_delete(entity, row, column, param=None):
        state["in_flight"] += 1
        state["peak"] = max(state["peak"], state["in_flight"])
        await asyncio.sleep(0.01)
        state["in_flight"] -= 1
        return True

    monkeypatch.setattr(client, "delete_entity", tracked_delete)
    return state


def test_cap_bounds_deletions_in_flight(make_client, monkeypatch):
    client = make_client(grid_size=4, max_concurrency=3)
    state = track_deletions(client, monkeypatch)

    summary = asyncio.run(clean_megaverse(client))

    assert state["peak"] == 3
    assert summary.succeeded == 48


def test_no_cap_overlaps_all_deletions(make_client, monkeypatch):
    client = make_client(grid_size=4, max_concurrency=0)
    state = track_deletions(client, monkeypatch)

    asyncio.run(clean_megaverse(client))

    assert state["peak"] == 48
