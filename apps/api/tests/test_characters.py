"""Character roster: archetypes, capacity, partial updates."""

import pytest

from grail_tracker.modules.characters.service import ARCHETYPES, starting_counters


def _create(client, campaign_id, character_type, player_name="Ann"):
    return client.post(
        f"/campaigns/{campaign_id}/characters",
        json={"character_type": character_type, "player_name": player_name},
    )


@pytest.mark.parametrize(
    "character_type,energy,health",
    [("Iunis", 6, 9), ("Gerdwyn", 6, 8), ("Elgan", 6, 7), ("Osbert", 7, 5)],
)
def test_starting_stats(client, campaign_id, character_type, energy, health):
    body = _create(client, campaign_id, character_type).json()
    assert (body["energy"], body["health"], body["terror"]) == (energy, health, 0)
    assert (body["food"], body["wealth"], body["experience"], body["magic"]) == (0, 0, 0, 0)


def test_starting_counters_table():
    assert set(ARCHETYPES) == {"Iunis", "Gerdwyn", "Elgan", "Osbert"}
    assert starting_counters("Osbert") == {
        "food": 0, "wealth": 0, "experience": 0, "magic": 0, "energy": 7, "health": 5, "terror": 0,
    }


def test_player_name_trimmed_and_required(client, campaign_id):
    assert _create(client, campaign_id, "Iunis", "  Ann  ").json()["player_name"] == "Ann"
    r = _create(client, campaign_id, "Elgan", "   ")
    assert r.status_code == 400
    assert r.json()["details"]["field"] == "player_name"


def test_unknown_archetype(client, campaign_id):
    r = _create(client, campaign_id, "Merlin")
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_argument"
    assert _create(client, campaign_id, None).status_code == 400


def test_missing_campaign(client):
    assert _create(client, 999, "Iunis").status_code == 404


def test_duplicate_archetype_conflicts_per_campaign(client, campaign_id, make_campaign):
    assert _create(client, campaign_id, "Iunis").status_code == 200
    r = _create(client, campaign_id, "Iunis", "Bob")
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"

    other = make_campaign("Other")
    assert _create(client, other, "Iunis").status_code == 200


def test_capacity_is_four(client, campaign_id):
    for t in ARCHETYPES:
        assert _create(client, campaign_id, t).status_code == 200

    # full roster reports capacity before the duplicate archetype
    r = _create(client, campaign_id, "Iunis")
    assert r.status_code == 409
    assert r.json()["error"] == "capacity_exceeded"
    assert len(client.get(f"/campaigns/{campaign_id}/characters").json()) == 4


def test_list_in_creation_order(client, campaign_id):
    for t in ("Osbert", "Iunis", "Elgan"):
        _create(client, campaign_id, t)
    items = client.get(f"/campaigns/{campaign_id}/characters").json()
    assert [c["character_type"] for c in items] == ["Osbert", "Iunis", "Elgan"]


def test_partial_update(client, campaign_id):
    c = _create(client, campaign_id, "Gerdwyn").json()
    url = f"/campaigns/{campaign_id}/characters/{c['id']}"

    body = client.put(url, json={"food": 3, "health": 0}).json()
    assert (body["food"], body["health"], body["energy"]) == (3, 0, 6)
    assert body["player_name"] == "Ann"

    body = client.put(url, json={"player_name": " Zoe ", "food": None}).json()
    assert (body["player_name"], body["food"]) == ("Zoe", 3)

    assert client.put(url, json={"player_name": ""}).status_code == 400


def test_update_and_delete_scoped_to_campaign(client, campaign_id, make_campaign):
    c = _create(client, campaign_id, "Elgan").json()
    other = make_campaign("Other")
    assert client.put(f"/campaigns/{other}/characters/{c['id']}", json={"food": 1}).status_code == 404
    assert client.delete(f"/campaigns/{other}/characters/{c['id']}").status_code == 404

    assert client.delete(f"/campaigns/{campaign_id}/characters/{c['id']}").status_code == 200
    assert client.get(f"/campaigns/{campaign_id}/characters").json() == []
    # archetype is free again
    assert _create(client, campaign_id, "Elgan").status_code == 200


def test_oversized_counter_is_invalid(client, campaign_id):
    c = _create(client, campaign_id, "Osbert").json()
    url = f"/campaigns/{campaign_id}/characters/{c['id']}"

    r = client.put(url, json={"health": 10**20})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_argument"
    assert r.json()["details"]["field"] == "health"
    assert client.get(f"/campaigns/{campaign_id}/characters").json()[0]["health"] == 5


def test_oversized_path_id_is_invalid(client, campaign_id):
    r = client.get("/campaigns/99999999999999999999/characters")
    assert r.status_code == 400
    assert r.json()["details"]["field"] == "campaign_id"
    r = client.delete(f"/campaigns/{campaign_id}/characters/99999999999999999999")
    assert r.status_code == 400
