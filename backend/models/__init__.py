from models.users import User, Role
from models.gate import Gate
from models.sighting import Sighting, Probability, Confidence, BIG_FIVE
from models.accommodation import (
    Accommodation, AccommodationAmenity, AccommodationReview, AccommodationImage,
    PriceTier, FEATURED_MIN_GUEST_RATING,
)
