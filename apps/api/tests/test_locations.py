"""Locations and entries: numbering scopes, nested create, partial updates."""

import sqlite3

import pytest

from grail_tracker.modules.locations.service import create_location, update_location


@pytest.fixture
def loc(client, campaign_id):
    r = client.post(
        f"/campaigns/{campaign_id}/locations",
        json={"number": 101, "name": "Cave", "dream": "a dream", "notes": "keep me", "has_menhir": True, "menhir_note": "lit"},
    )
    assert r.status_code == 200, r.text
    return r.json()


def _url(campaign_id, location_id=None):
    base = f"/campaigns/{campaign_id}/locations"
    return base if location_id is None else f"{base}/{location_id}"


# ── Create ───────────────────────────────────────────────


def test_create_defaults(client, campaign_id):
    r = client.post(_url(campaign_id), json={"number": 5, "name": "Field", "dream": "", "notes": ""})
    body = r.json()
    assert body["has_menhir"] is False
    assert body["dream"] is None and body["notes"] is None and body["nightmare"] is None
    assert body["entries"] == []


def test_create_requires_number_and_name(client, campaign_id):
    assert client.post(_url(campaign_id), json={"name": "x"}).status_code == 400
    assert client.post(_url(campaign_id), json={"number": 0, "name": "x"}).status_code == 400
    assert client.post(_url(campaign_id), json={"number": 1, "name": " "}).status_code == 400


def test_create_missing_campaign(client):
    assert client.post(_url(999), json={"number": 1, "name": "x"}).status_code == 404


def test_duplicate_number_conflicts_in_campaign_only(client, campaign_id, make_campaign, loc):
    r = client.post(_url(campaign_id), json={"number": 101, "name": "Other"})
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"

    other = make_campaign("Other")
    assert client.post(_url(other), json={"number": 101, "name": "Other"}).status_code == 200


def test_nested_entries_round_trip(client, campaign_id):
    entries = [
        {"number": 3, "info": "third", "status": "done"},
        {"number": 1, "info": "first", "status": None},
        {"number": 2, "info": None, "status": "open"},
    ]
    created = client.post(_url(campaign_id), json={"number": 7, "name": "Ruins", "entries": entries}).json()

    got = client.get(_url(campaign_id, created["id"])).json()
    assert [(e["number"], e["info"], e["status"]) for e in got["entries"]] == [
        (1, "first", None),
        (2, None, "open"),
        (3, "third", "done"),
    ]
    assert all(e["location_id"] == created["id"] for e in got["entries"])


def test_nested_entries_are_atomic(client, campaign_id):
    r = client.post(_url(campaign_id), json={"number": 8, "name": "Bad", "entries": [{"number": 1}, {"number": 1}]})
    assert r.status_code == 409
    # nothing written
    assert client.get(f"/campaigns/{campaign_id}").json()["locations"] == []


def test_failed_entry_insert_rolls_back_location(client, campaign_id, fail_inserts_on, count_rows):
    fail_inserts_on("entries")
    with pytest.raises(sqlite3.IntegrityError):
        create_location(campaign_id, {"number": 9, "name": "Half", "entries": [{"number": 1}, {"number": 2}]})
    assert count_rows("locations") == 0
    assert count_rows("entries") == 0


def test_oversized_numbers_are_invalid(client, campaign_id, count_rows):
    r = client.post(_url(campaign_id), json={"number": 10**20, "name": "Far"})
    assert r.status_code == 400
    assert r.json()["details"]["field"] == "number"

    r = client.post(_url(campaign_id), json={"number": 1, "name": "Far", "entries": [{"number": 10**20}]})
    assert r.status_code == 400
    assert r.json()["details"]["field"] == "entries.number"
    assert count_rows("locations") == 0


# ── Get / delete ─────────────────────────────────────────


def test_get_location_scoped_to_campaign(client, make_campaign, loc):
    other = make_campaign("Other")
    assert client.get(_url(other, loc["id"])).status_code == 404
    assert client.get(_url(loc["campaign_id"], "x")).status_code == 400


def test_delete_location_cascades_entries(client, campaign_id, loc):
    client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1})
    assert client.delete(_url(campaign_id, loc["id"])).json() == {"success": True, "message": None}
    assert client.get(_url(campaign_id, loc["id"])).status_code == 404
    assert client.delete(_url(campaign_id, loc["id"])).status_code == 404


# ── Update ───────────────────────────────────────────────


def test_renumber_to_own_number(client, campaign_id, loc):
    r = client.put(_url(campaign_id, loc["id"]), json={"number": 101, "name": "Cave 2"})
    assert r.status_code == 200
    assert r.json()["name"] == "Cave 2"


def test_renumber_onto_taken_number_conflicts(client, campaign_id, loc):
    client.post(_url(campaign_id), json={"number": 102, "name": "Next"})
    assert client.put(_url(campaign_id, loc["id"]), json={"number": 102}).status_code == 409
    r = client.put(_url(campaign_id, loc["id"]), json={"number": 103})
    assert r.json()["number"] == 103


def test_explicit_null_clears_but_absent_keeps(client, campaign_id, loc):
    r = client.put(_url(campaign_id, loc["id"]), json={"name": "Renamed"})
    body = r.json()
    assert body["notes"] == "keep me"
    assert body["dream"] == "a dream"

    r = client.put(_url(campaign_id, loc["id"]), json={"notes": None})
    body = r.json()
    assert body["notes"] is None
    assert body["dream"] == "a dream"
    assert body["name"] == "Renamed"


def test_has_menhir_false_is_applied(client, campaign_id, loc):
    body = client.put(_url(campaign_id, loc["id"]), json={"has_menhir": False}).json()
    assert body["has_menhir"] is False
    assert body["menhir_note"] == "lit"

    body = client.put(_url(campaign_id, loc["id"]), json={"has_menhir": None, "name": None}).json()
    assert body["has_menhir"] is False
    assert body["name"] == "Cave"


def test_update_replaces_entries_when_given(client, campaign_id, loc):
    client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1, "info": "old"})

    body = client.put(_url(campaign_id, loc["id"]), json={"notes": "x"}).json()
    assert [e["number"] for e in body["entries"]] == [1]

    body = client.put(_url(campaign_id, loc["id"]), json={"entries": [{"number": 4}, {"number": 2, "info": "new"}]}).json()
    assert [(e["number"], e["info"]) for e in body["entries"]] == [(2, "new"), (4, None)]

    body = client.put(_url(campaign_id, loc["id"]), json={"entries": []}).json()
    assert body["entries"] == []


def test_failed_entry_replace_rolls_back_update(client, campaign_id, loc, fail_inserts_on):
    client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1, "info": "old"})
    fail_inserts_on("entries")

    with pytest.raises(sqlite3.IntegrityError):
        update_location(campaign_id, loc["id"], {"name": "Renamed", "entries": [{"number": 5}]})

    body = client.get(_url(campaign_id, loc["id"])).json()
    assert body["name"] == "Cave"
    assert [(e["number"], e["info"]) for e in body["entries"]] == [(1, "old")]


def test_update_missing_location(client, campaign_id):
    assert client.put(_url(campaign_id, 999), json={"name": "x"}).status_code == 404


# ── Entries ──────────────────────────────────────────────


def test_entry_create_defaults_status_unknown(client, campaign_id, loc):
    r = client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1})
    assert r.status_code == 200
    assert r.json()["status"] == "unknown"
    assert r.json()["info"] is None


def test_entry_numbers_unique_per_location(client, campaign_id, loc):
    other = client.post(_url(campaign_id), json={"number": 102, "name": "Other"}).json()
    assert client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1}).status_code == 200
    r = client.post(f"{_url(campaign_id, loc['id'])}/entries", json={"number": 1})
    assert r.status_code == 409
    assert client.post(f"{_url(campaign_id, other['id'])}/entries", json={"number": 1}).status_code == 200


def test_entry_requires_location_in_campaign(client, make_campaign, loc):
    other = make_campaign("Other")
    assert client.post(f"{_url(other, loc['id'])}/entries", json={"number": 1}).status_code == 404


def test_entry_partial_update(client, campaign_id, loc):
    base = f"{_url(campaign_id, loc['id'])}/entries"
    e = client.post(base, json={"number": 1, "info": "clue", "status": "open"}).json()
    client.post(base, json={"number": 2})

    body = client.put(f"{base}/{e['id']}", json={"status": "done"}).json()
    assert (body["number"], body["info"], body["status"]) == (1, "clue", "done")

    body = client.put(f"{base}/{e['id']}", json={"info": None, "number": 1}).json()
    assert body["info"] is None

    assert client.put(f"{base}/{e['id']}", json={"number": 2}).status_code == 409
    assert client.put(f"{base}/999", json={"number": 3}).status_code == 404


def test_entry_delete(client, campaign_id, loc):
    base = f"{_url(campaign_id, loc['id'])}/entries"
    e = client.post(base, json={"number": 1}).json()
    assert client.delete(f"{base}/{e['id']}").status_code == 200
    assert client.delete(f"{base}/{e['id']}").status_code == 404
    assert client.delete(f"{base}/nope").status_code == 400
