# backend/seed.py
"""Default rows for a fresh database.

seed_defaults() is called once at startup. Each group is inserted only when its
table is empty, so calling it again is a no-op. It is not safe to run from two
processes at the same time.
"""
import logging

from sqlalchemy.orm import Session

from models.users import User, Role
from models.gate import Gate
from models.sighting import Sighting
from models.accommodation import (
    Accommodation, AccommodationAmenity, AccommodationReview, AccommodationImage, PriceTier,
)
from utils.accommodation_queries import recompute_rating
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    # email, password, first name, last name, phone, role
    ("admin@krugerpark.com", "admin123", "Park", "Administrator", "+27 123 456 789", Role.ADMIN),
    ("ranger@krugerpark.com", "ranger123", "John", "Ranger", "+27 123 456 788", Role.RANGER),
    ("visitor@example.com", "visitor123", "Sarah", "Visitor", "+27 123 456 787", Role.VISITOR),
]

DEFAULT_GATES = [
    ("Malelane Gate", "Southern entrance, great for lions and elephants", "Southern Kruger"),
    ("Phabeni Gate", "Near Sabie, good for leopards and buffalo", "Central Kruger"),
    ("Numbi Gate", "Close to Hazyview, known for rhino sightings", "Central Kruger"),
    ("Paul Kruger Gate", "Main central gate, excellent for Big Five", "Central Kruger"),
    ("Orpen Gate", "Western gate, great for cheetah and wild dog", "Western Kruger"),
    ("Punda Maria Gate", "Northern gate, birding paradise", "Northern Kruger"),
]

DEFAULT_SIGHTINGS = [
    ("Malelane Gate", "lion", "high", "confirmed", "Pride of 12 near S25 road, including cubs. Best viewing: sunrise"),
    ("Malelane Gate", "elephant", "medium", "confirmed", "Herd of 30+ moving toward Crocodile River"),
    ("Phabeni Gate", "leopard", "medium", "confirmed", "Regular sightings near Phabeni dam. Often in marula trees"),
    ("Phabeni Gate", "buffalo", "high", "confirmed", "Large herd of 200+ grazing near entrance gate"),
    ("Numbi Gate", "rhino", "low", "reported", "Single white rhino spotted near Fayi Loop"),
    ("Paul Kruger Gate", "lion", "high", "confirmed", "Dominant male and pride frequenting Skukuza area"),
    ("Paul Kruger Gate", "elephant", "high", "confirmed", "Large breeding herds near Sabie River"),
    ("Orpen Gate", "leopard", "medium", "confirmed", "Female with cubs seen near Orpen dam"),
]

DEFAULT_ACCOMMODATIONS = [
    {
        "name": "Lion Sands Game Reserve", "type": "Lodge",
        "description": "Luxury safari experience with river views",
        "star_rating": 5, "price": "$$$$",
        "amenities": ["pool", "spa", "wifi", "restaurant", "bar", "safari"],
        "location": "Sabi Sand Game Reserve", "proximity_to_gates": "Malelane Gate, Paul Kruger Gate",
        "contact_info": "+27 123 456 789", "website_url": "https://lionsands.com",
        "booking_info": "Book directly via website or preferred travel agent",
        "is_women_owned": False, "is_eco_friendly": True, "is_family_friendly": True,
        "images": [("/images/lion-sands-1.jpg", "Main lodge area", True), ("/images/lion-sands-2.jpg", "Luxury suite", False)],
        "reviews": [
            ("Sarah Johnson", 5, "Absolutely incredible experience! The guides were knowledgeable and the accommodation was luxurious."),
            ("Michael Brown", 4, "Wonderful stay, but quite expensive. Worth it for a special occasion."),
        ],
    },
    {
        "name": "Singita Lebombo Lodge", "type": "Lodge",
        "description": "Contemporary luxury lodge overlooking Nwanetsi River",
        "star_rating": 5, "price": "$$$$",
        "amenities": ["pool", "spa", "wifi", "restaurant", "bar", "game_drives"],
        "location": "Kruger National Park", "proximity_to_gates": "Paul Kruger Gate, Phabeni Gate",
        "contact_info": "+27 123 456 788", "website_url": "https://singita.com",
        "booking_info": "Advanced booking required, all-inclusive packages",
        "is_women_owned": False, "is_eco_friendly": True, "is_family_friendly": False,
        "images": [("/images/singita-1.jpg", "River view suite", True)],
        "reviews": [("Emma Wilson", 5, "Best safari experience of our lives. The attention to detail was exceptional.")],
    },
    {
        "name": "Jock Safari Lodge", "type": "Lodge",
        "description": "First private concession in Kruger National Park",
        "star_rating": 4, "price": "$$$",
        "amenities": ["pool", "wifi", "restaurant", "bar", "safari", "bush_walks"],
        "location": "Fitzpatrick Gate", "proximity_to_gates": "Malelane Gate",
        "contact_info": "+27 123 456 787", "website_url": "https://jocksafarilodge.com",
        "booking_info": "Direct booking available, family packages",
        "is_women_owned": False, "is_eco_friendly": True, "is_family_friendly": True,
        "images": [("/images/jock-1.jpg", "Swimming pool area", True)],
        "reviews": [("David Thompson", 4, "Great family-friendly lodge. Kids loved the pool and game drives.")],
    },
    {
        "name": "Hamiltons Tented Camp", "type": "Tented Camp",
        "description": "Luxury tented camp with vintage safari ambiance",
        "star_rating": 4, "price": "$$$",
        "amenities": ["pool", "wifi", "restaurant", "bar", "game_drives"],
        "location": "Imbali Safari Lodge", "proximity_to_gates": "Numbi Gate",
        "contact_info": "+27 123 456 786", "website_url": "https://hamiltonstentedcamp.com",
        "booking_info": "Email or phone booking, romantic packages",
        "is_women_owned": True, "is_eco_friendly": True, "is_family_friendly": False,
        "images": [("/images/hamiltons-1.jpg", "Luxury tent interior", True)],
        "reviews": [("Lisa Chen", 5, "Romantic and intimate. Perfect for our honeymoon.")],
    },
    {
        "name": "Pafuri Camp", "type": "Camp",
        "description": "Wilderness experience in Kruger's northern region",
        "star_rating": 3, "price": "$$",
        "amenities": ["wifi", "restaurant", "bar", "game_drives", "bird_watching"],
        "location": "Pafuri Gate", "proximity_to_gates": "Punda Maria Gate",
        "contact_info": "+27 123 456 785", "website_url": "https://pafuricamp.com",
        "booking_info": "Online booking, wilderness experiences",
        "is_women_owned": False, "is_eco_friendly": True, "is_family_friendly": True,
        "images": [("/images/pafuri-1.jpg", "Wilderness camp", True)],
        "reviews": [("James Miller", 4, "Authentic wilderness experience. Bird watching was spectacular.")],
    },
    {
        "name": "Satara Rest Camp", "type": "Rest Camp",
        "description": "Popular camp known for excellent lion sightings",
        "star_rating": 3, "price": "$$",
        "amenities": ["pool", "restaurant", "shop", "petrol_station", "campground"],
        "location": "Central Kruger", "proximity_to_gates": "Orpen Gate, Paul Kruger Gate",
        "contact_info": "+27 123 456 784", "website_url": "https://sanparks.org",
        "booking_info": "Book via SANParks website, self-catering available",
        "is_women_owned": False, "is_eco_friendly": False, "is_family_friendly": True,
        "images": [("/images/satara-1.jpg", "Rest camp facilities", True)],
        "reviews": [("Karen Davis", 4, "Great value for money. Perfect for families on a budget.")],
    },
]


def seed_users(db: Session) -> int:
    if db.query(User).count() > 0:
        return 0
    for email, password, first_name, last_name, phone, role in DEFAULT_USERS:
        db.add(User(
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role.value,
        ))
    db.flush()
    logger.info("Created %d default users", len(DEFAULT_USERS))
    return len(DEFAULT_USERS)


def seed_gates(db: Session) -> int:
    if db.query(Gate).count() > 0:
        return 0
    for gate_name, description, location in DEFAULT_GATES:
        db.add(Gate(gate_name=gate_name, description=description, location=location))
    db.flush()
    logger.info("Inserted %d park gates", len(DEFAULT_GATES))
    return len(DEFAULT_GATES)


def seed_sightings(db: Session) -> int:
    if db.query(Sighting).count() > 0:
        return 0

    gates = {g.gate_name: g.id for g in db.query(Gate).all()}
    ranger = db.query(User).filter(User.role == Role.RANGER.value).first()
    if ranger is None:
        logger.warning("No ranger account found, sample sightings have no reporter")

    for gate_name, animal, probability, confidence, notes in DEFAULT_SIGHTINGS:
        db.add(Sighting(
            gate_id=gates.get(gate_name),
            animal_type=animal,
            probability=probability,
            confidence=confidence,
            notes=notes,
            reported_by=ranger.id if ranger else None,
        ))
    db.flush()
    logger.info("Inserted %d wildlife sightings", len(DEFAULT_SIGHTINGS))
    return len(DEFAULT_SIGHTINGS)


def seed_accommodations(db: Session) -> int:
    if db.query(Accommodation).count() > 0:
        return 0

    for item in DEFAULT_ACCOMMODATIONS:
        acc = Accommodation(
            name=item["name"],
            type=item["type"],
            description=item["description"],
            star_rating=item["star_rating"],
            price_tier=PriceTier.from_symbol(item["price"]).value,
            location=item["location"],
            proximity_to_gates=item["proximity_to_gates"],
            contact_info=item["contact_info"],
            website_url=item["website_url"],
            booking_info=item["booking_info"],
            is_women_owned=item["is_women_owned"],
            is_eco_friendly=item["is_eco_friendly"],
            is_family_friendly=item["is_family_friendly"],
            review_count=0,
        )
        acc.amenities = [AccommodationAmenity(name=name) for name in item["amenities"]]
        acc.images = [
            AccommodationImage(image_url=url, caption=caption, is_primary=primary)
            for url, caption, primary in item["images"]
        ]
        acc.reviews = [
            AccommodationReview(guest_name=guest, rating=rating, comment=comment)
            for guest, rating, comment in item["reviews"]
        ]
        db.add(acc)
        db.flush()
        # Ratings are derived from the reviews, never typed in
        recompute_rating(db, acc)

    db.flush()
    logger.info("Inserted %d accommodations", len(DEFAULT_ACCOMMODATIONS))
    return len(DEFAULT_ACCOMMODATIONS)


def seed_defaults(db: Session) -> dict:
    """Populate empty tables with the default data set and commit."""
    inserted = {
        "users": seed_users(db),
        "gates": seed_gates(db),
        "sightings": seed_sightings(db),
        "accommodations": seed_accommodations(db),
    }
    db.commit()
    return inserted


def clear_wildlife(db: Session) -> None:
    db.query(Sighting).delete(synchronize_session=False)
    db.query(Gate).delete(synchronize_session=False)


# Children first so no review, image or amenity is left without its parent
def clear_accommodations(db: Session) -> None:
    db.query(AccommodationReview).delete(synchronize_session=False)
    db.query(AccommodationImage).delete(synchronize_session=False)
    db.query(AccommodationAmenity).delete(synchronize_session=False)
    db.query(Accommodation).delete(synchronize_session=False)


def reset_wildlife(db: Session) -> dict:
    clear_wildlife(db)
    db.expire_all()
    inserted = {"gates": seed_gates(db), "sightings": seed_sightings(db)}
    db.commit()
    return inserted


def reset_accommodations(db: Session) -> dict:
    clear_accommodations(db)
    db.expire_all()
    inserted = {"accommodations": seed_accommodations(db)}
    db.commit()
    return inserted


def reset_all(db: Session) -> None:
    clear_accommodations(db)
    clear_wildlife(db)
    db.commit()


if __name__ == "__main__":
    from database import SessionLocal, init_db

    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        print(seed_defaults(session))
    finally:
        session.close()
