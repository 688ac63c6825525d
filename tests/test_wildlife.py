"""
Tests for sighting listing, search, best-gates, big-five and ranger reports.
"""
from datetime import timedelta

from models.sighting import Sighting

URL = "/api/wildlife"


def ids(items):
    return [item["id"] for item in items]


def test_list_all_newest_first_with_names(client, make_gate, make_sighting, ranger_user):
    gate = make_gate("Orpen Gate", location="Western Kruger")
    older = make_sighting("leopard", gate, age=timedelta(days=2), reporter=ranger_user)
    newer = make_sighting("lion", gate, age=timedelta(hours=1), reporter=ranger_user)

    response = client.get(URL)

    assert response.status_code == 200
    data = response.json()
    assert ids(data) == [newer.id, older.id]
    assert data[0]["gate_name"] == "Orpen Gate"
    assert data[0]["gate_location"] == "Western Kruger"
    assert data[0]["reporter_first_name"] == "John"
    assert data[0]["reporter_last_name"] == "Ranger"


def test_missing_relations_yield_null_fields(client, make_sighting):
    """Test sightings without gate or reporter are still listed."""
    orphan = make_sighting("hyena", gate=None, reporter=None)

    data = client.get(URL).json()

    assert ids(data) == [orphan.id]
    assert data[0]["gate_name"] is None
    assert data[0]["reporter_first_name"] is None


def test_pagination_returns_window_and_true_total(client, make_gate, make_sighting):
    gate = make_gate()
    # newest first: hours=1..5
    created = [make_sighting("lion", gate, age=timedelta(hours=h)) for h in range(1, 6)]

    response = client.get(f"{URL}/sightings", params={"limit": 2, "offset": 2})

    assert response.status_code == 200
    data = response.json()
    assert ids(data["sightings"]) == [created[2].id, created[3].id]
    assert data["total"] == 5
    assert data["limit"] == 2
    assert data["offset"] == 2


def test_search_filters(client, make_gate, make_sighting):
    malelane = make_gate("Malelane Gate")
    orpen = make_gate("Orpen Gate")
    lion = make_sighting("lion", malelane, probability="high")
    make_sighting("lion", orpen, probability="low")
    make_sighting("elephant", malelane, probability="high")

    by_animal = client.get(f"{URL}/sightings", params={"animal": "Lion"}).json()
    assert by_animal["total"] == 2

    combined = client.get(
        f"{URL}/sightings", params={"animal": "lion", "gate": "Malelane Gate", "probability": "high"},
    ).json()
    assert ids(combined["sightings"]) == [lion.id]
    assert combined["total"] == 1


def test_get_sighting_by_id(client, make_gate, make_sighting):
    sighting = make_sighting("rhino", make_gate("Numbi Gate"), probability="low", confidence="reported")

    response = client.get(f"{URL}/sightings/{sighting.id}")

    assert response.status_code == 200
    assert response.json()["animal_type"] == "rhino"
    assert response.json()["gate_name"] == "Numbi Gate"


def test_get_missing_sighting_is_404(client):
    response = client.get(f"{URL}/sightings/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Sighting not found"}


def test_gates_with_counts(client, make_gate, make_sighting):
    busy = make_gate("Phabeni Gate")
    make_gate("Punda Maria Gate")
    make_sighting("buffalo", busy)
    make_sighting("leopard", busy)

    data = {g["gate_name"]: g for g in client.get(f"{URL}/gates").json()}

    assert data["Phabeni Gate"]["sighting_count"] == 2
    assert data["Phabeni Gate"]["last_updated"] is not None
    assert data["Punda Maria Gate"]["sighting_count"] == 0
    assert data["Punda Maria Gate"]["last_updated"] is None


def test_gate_sightings(client, make_gate, make_sighting):
    gate = make_gate("Phabeni Gate")
    other = make_gate("Orpen Gate")
    mine = make_sighting("buffalo", gate)
    make_sighting("lion", other)

    response = client.get(f"{URL}/gates/{gate.id}/sightings")

    assert ids(response.json()) == [mine.id]


def test_gate_sightings_unknown_gate(client):
    response = client.get(f"{URL}/gates/404/sightings")

    assert response.status_code == 404


def test_best_gates_requires_animals(client):
    response = client.get(f"{URL}/best-gates")

    assert response.status_code == 400
    assert response.json() == {"error": "Animals parameter required"}


def test_best_gates_excludes_stale_sightings(client, make_gate, make_sighting):
    """Test an 8-day-old high-probability sighting drops out of the window."""
    gate = make_gate()
    fresh = make_sighting("lion", gate, probability="high", age=timedelta(days=1))
    make_sighting("lion", gate, probability="high", age=timedelta(days=8))

    response = client.get(f"{URL}/best-gates", params={"animals": "lion"})

    assert ids(response.json()) == [fresh.id]


def test_best_gates_excludes_low_probability_and_other_animals(client, make_gate, make_sighting):
    gate = make_gate()
    medium = make_sighting("leopard", gate, probability="medium")
    make_sighting("leopard", gate, probability="low")
    make_sighting("giraffe", gate, probability="high")

    response = client.get(f"{URL}/best-gates", params={"animals": "leopard, lion"})

    assert ids(response.json()) == [medium.id]


def test_best_gates_ordering(client, make_gate, make_sighting):
    gate = make_gate()
    medium_recent = make_sighting("lion", gate, probability="medium", confidence="confirmed", age=timedelta(hours=1))
    high_suspected = make_sighting("lion", gate, probability="high", confidence="suspected", age=timedelta(hours=2))
    high_confirmed_old = make_sighting("lion", gate, probability="high", confidence="confirmed", age=timedelta(days=3))
    high_confirmed_new = make_sighting("lion", gate, probability="high", confidence="confirmed", age=timedelta(days=1))
    high_reported = make_sighting("lion", gate, probability="high", confidence="reported", age=timedelta(days=5))

    response = client.get(f"{URL}/best-gates", params={"animals": "lion"})

    assert ids(response.json()) == [
        high_confirmed_new.id,
        high_confirmed_old.id,
        high_reported.id,
        high_suspected.id,
        medium_recent.id,
    ]


def test_big_five_summary(client, make_gate, make_sighting):
    """Test only the five canonical species inside 30 days are returned."""
    gate = make_gate()
    lion = make_sighting("lion", gate, probability="low", age=timedelta(days=2))
    buffalo = make_sighting("buffalo", gate, age=timedelta(days=29))
    make_sighting("cheetah", gate, probability="high", age=timedelta(days=1))
    make_sighting("elephant", gate, age=timedelta(days=31))

    response = client.get(f"{URL}/big-five-summary")

    assert ids(response.json()) == [lion.id, buffalo.id]


def test_ranger_reports_sighting(client, db, make_gate, ranger_user, ranger_headers):
    gate = make_gate("Numbi Gate")

    response = client.post(
        f"{URL}/sightings",
        headers=ranger_headers,
        json={"gate_id": gate.id, "animal_type": " Rhino ", "probability": "medium", "notes": "Near Fayi Loop"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["animal_type"] == "rhino"
    assert data["confidence"] == "reported"
    assert data["reported_by"] == ranger_user.id
    assert data["gate_name"] == "Numbi Gate"
    assert db.query(Sighting).count() == 1


def test_report_sighting_unknown_gate(client, ranger_headers):
    response = client.post(
        f"{URL}/sightings",
        headers=ranger_headers,
        json={"gate_id": 77, "animal_type": "lion", "probability": "high"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Gate not found"}


def test_report_sighting_invalid_probability(client, make_gate, ranger_headers):
    gate = make_gate()

    response = client.post(
        f"{URL}/sightings",
        headers=ranger_headers,
        json={"gate_id": gate.id, "animal_type": "lion", "probability": "certain"},
    )

    assert response.status_code == 400


def test_report_sighting_requires_token(client):
    response = client.post(f"{URL}/sightings", json={"gate_id": 1, "animal_type": "lion", "probability": "high"})

    assert response.status_code == 401


def test_ranger_updates_sighting(client, make_gate, make_sighting, ranger_headers):
    first = make_gate("Malelane Gate")
    second = make_gate("Orpen Gate")
    sighting = make_sighting("lion", first, probability="low", confidence="suspected")

    response = client.put(
        f"{URL}/sightings/{sighting.id}",
        headers=ranger_headers,
        json={"probability": "high", "confidence": "confirmed", "gate_id": second.id},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["probability"] == "high"
    assert data["confidence"] == "confirmed"
    assert data["gate_name"] == "Orpen Gate"
    assert data["animal_type"] == "lion"


def test_update_missing_sighting(client, ranger_headers):
    response = client.put(f"{URL}/sightings/999", headers=ranger_headers, json={"notes": "gone"})

    assert response.status_code == 404


def test_visitor_cannot_update_sighting(client, make_gate, make_sighting, visitor_headers):
    sighting = make_sighting("lion", make_gate())

    response = client.put(f"{URL}/sightings/{sighting.id}", headers=visitor_headers, json={"notes": "x"})

    assert response.status_code == 403
