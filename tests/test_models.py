"""
Unit tests for enums, schema parsing and table constraints.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from models.accommodation import AccommodationAmenity, AccommodationReview, PriceTier
from models.sighting import BIG_FIVE, Confidence, Probability, Sighting
from schemas.accommodation import split_amenities
from utils.sighting_queries import parse_animals


def test_price_tier_symbols_and_order():
    assert [t.symbol for t in PriceTier] == ["$", "$$", "$$$", "$$$$"]
    assert PriceTier.from_symbol("$$$") > PriceTier.from_symbol("$")
    assert PriceTier.from_symbol(" $$ ") is PriceTier.MODERATE


@pytest.mark.parametrize("symbol", [None, "", "cheap", "$$$$$", "$ $", "€"])
def test_price_tier_unknown_symbol(symbol):
    assert PriceTier.from_symbol(symbol) is None


def test_probability_and_confidence_ranks():
    assert Probability.HIGH.rank < Probability.MEDIUM.rank < Probability.LOW.rank
    assert Confidence.CONFIRMED.rank < Confidence.REPORTED.rank < Confidence.SUSPECTED.rank


def test_big_five_members():
    assert set(BIG_FIVE) == {"lion", "elephant", "leopard", "rhino", "buffalo"}
    assert "cheetah" not in BIG_FIVE


def test_split_amenities():
    assert split_amenities("Pool, wifi,,pool , SPA") == ["pool", "wifi", "spa"]
    assert split_amenities(["Wifi", "wifi"]) == ["wifi"]
    assert split_amenities(None) == []


def test_parse_animals():
    assert parse_animals("Lion, elephant ,") == ["lion", "elephant"]
    assert parse_animals("") == []


def test_amenity_names_are_unique_per_accommodation(db, make_accommodation):
    acc = make_accommodation(amenities=["wifi"])

    db.add(AccommodationAmenity(accommodation_id=acc.id, name="wifi"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_review_rating_constraint(db, make_accommodation):
    acc = make_accommodation()

    db.add(AccommodationReview(accommodation_id=acc.id, rating=9))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_sighting_probability_constraint(db):
    db.add(Sighting(animal_type="lion", probability="certain", confidence="confirmed"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_price_range_property(make_accommodation):
    assert make_accommodation(price="$$$").price_range == "$$$"
    assert make_accommodation(name="Unpriced", price=None).price_range is None
