"""
Tests for default data seeding and the admin maintenance endpoints.
"""
import pytest

import seed
from models.accommodation import Accommodation, AccommodationAmenity, AccommodationReview
from models.gate import Gate
from models.sighting import Sighting
from models.users import Role, User
from utils.hashing import verify_password

URL = "/api/admin"


@pytest.fixture
def seeded(db):
    return seed.seed_defaults(db)


def test_seed_defaults_on_empty_database(db, seeded):
    assert seeded == {
        "users": len(seed.DEFAULT_USERS),
        "gates": len(seed.DEFAULT_GATES),
        "sightings": len(seed.DEFAULT_SIGHTINGS),
        "accommodations": len(seed.DEFAULT_ACCOMMODATIONS),
    }
    assert db.query(Gate).count() == 6
    assert db.query(Sighting).count() == 8


def test_seed_defaults_is_idempotent(db, seeded):
    again = seed.seed_defaults(db)

    assert again == {"users": 0, "gates": 0, "sightings": 0, "accommodations": 0}
    assert db.query(User).count() == len(seed.DEFAULT_USERS)
    assert db.query(Accommodation).count() == len(seed.DEFAULT_ACCOMMODATIONS)


def test_seeded_users_have_hashed_passwords(db, seeded):
    admin = db.query(User).filter(User.email == "admin@krugerpark.com").one()

    assert admin.role == Role.ADMIN.value
    assert admin.password_hash != "admin123"
    assert verify_password("admin123", admin.password_hash)


def test_seeded_sightings_are_reported_by_ranger(db, seeded):
    ranger = db.query(User).filter(User.role == Role.RANGER.value).one()

    assert {s.reported_by for s in db.query(Sighting).all()} == {ranger.id}
    assert db.query(Sighting).filter(Sighting.gate_id.is_(None)).count() == 0


def test_seeded_ratings_are_derived_from_reviews(db, seeded):
    lodge = db.query(Accommodation).filter(Accommodation.name == "Lion Sands Game Reserve").one()

    assert lodge.review_count == 2
    assert lodge.guest_rating == pytest.approx(4.5)
    assert lodge.price_range == "$$$$"
    assert "spa" in lodge.amenity_names


def test_seeded_login_works(client, seeded):
    response = client.post("/api/auth/login", json={"email": "ranger@krugerpark.com", "password": "ranger123"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "ranger"


def test_summary_requires_admin(client, ranger_headers):
    response = client.get(f"{URL}/summary", headers=ranger_headers)

    assert response.status_code == 403


def test_summary_counts(client, seeded, admin_headers):
    response = client.get(f"{URL}/summary", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["gates"] == 6
    assert data["sightings"] == 8
    assert data["accommodations"] == 6
    # three seeded users plus the admin making the request
    assert data["users"] == 4


def test_reset_all_clears_park_data_but_keeps_users(client, db, seeded, admin_headers):
    response = client.post(f"{URL}/reset-all", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "All data cleared successfully"}
    assert db.query(Sighting).count() == 0
    assert db.query(Gate).count() == 0
    assert db.query(Accommodation).count() == 0
    assert db.query(AccommodationReview).count() == 0
    assert db.query(AccommodationAmenity).count() == 0
    assert db.query(User).count() == 4


def test_setup_data_reloads_wildlife(client, db, make_gate, make_sighting, ranger_user, admin_headers):
    make_sighting("cheetah", make_gate("Temporary Gate"))

    response = client.post(f"{URL}/setup-data", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data_loaded"] == {"gates": 6, "sightings": 8}
    assert db.query(Gate).filter(Gate.gate_name == "Temporary Gate").count() == 0
    assert db.query(Sighting).filter(Sighting.animal_type == "cheetah").count() == 0
    assert {s.reported_by for s in db.query(Sighting).all()} == {ranger_user.id}


def test_setup_accommodations_reloads_sample_set(client, db, make_accommodation, admin_headers):
    make_accommodation(name="Scratch Lodge", amenities=["wifi"])

    response = client.post(f"{URL}/setup-accommodations", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data_loaded"] == {"accommodations": 6}
    assert db.query(Accommodation).filter(Accommodation.name == "Scratch Lodge").count() == 0
    assert db.query(Accommodation).count() == 6


def test_list_users_paginated_and_filtered(client, make_user, admin_headers):
    for i in range(3):
        make_user(f"visitor{i}@example.com")
    make_user("ranger1@example.com", Role.RANGER)

    page = client.get(f"{URL}/users", headers=admin_headers, params={"page": 1, "page_size": 2})
    assert page.status_code == 200
    assert page.json()["total"] == 5
    assert len(page.json()["items"]) == 2

    rangers = client.get(f"{URL}/users", headers=admin_headers, params={"role": "ranger"}).json()
    assert [u["email"] for u in rangers["items"]] == ["ranger1@example.com"]

    search = client.get(
        f"{URL}/users", headers=admin_headers, params={"q": "VISITOR", "sort_by": "email", "order": "desc"},
    ).json()
    assert [u["email"] for u in search["items"]] == [
        "visitor2@example.com", "visitor1@example.com", "visitor0@example.com",
    ]


def test_health_and_banner(client):
    health = client.get("/api/health")
    assert health.status_code == 200
    assert health.json()["database"] == "connected"

    banner = client.get("/")
    assert banner.status_code == 200
    assert banner.json()["endpoints"]["health"] == "/api/health"


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
