# beachbbq/catalog.py
"""
Static reference data: beach locations, packages and the daily time slots.

Nothing here changes at runtime; the pool size lives in settings because a
deployment may own more or fewer BBQs.
"""
from decimal import Decimal

# Non-overlapping daily slots, one hour of turnaround between consecutive ones
TIME_SLOTS = (
    "09:00-12:00",
    "13:00-16:00",
    "17:00-20:00",
)

CLEANUP_AMOUNT = Decimal("5.00")

LOCATIONS = [
    {
        "id": 1,
        "name": "Golden Bay",
        "description": "Beautiful sandy beach perfect for sunset BBQs",
        "image_url": "https://media.istockphoto.com/id/479913374/photo/golden-bay-beach-on-malta.jpg",
    },
    {
        "id": 2,
        "name": "Għajn Tuffieħa",
        "description": "Scenic red sand beach with crystal clear waters",
        "image_url": "https://media.istockphoto.com/id/1473500985/photo/ghajn-tuffieha-beach-at-sunset-in-the-golden-bay-of-malta.jpg",
    },
    {
        "id": 3,
        "name": "Mellieħa Bay (Għadira)",
        "description": "Malta's largest sandy beach, perfect for families",
        "image_url": "https://gayguidemalta.com/wp-content/uploads/2018/05/Mellieha-Bay-Malta.jpg",
    },
    {
        "id": 4,
        "name": "Armier Bay & Little Armier",
        "description": "Twin bays with shallow waters ideal for BBQ gatherings",
        "image_url": "https://www.rentaboat.com.mt/media/2947/little_armier_bay_41.jpg",
    },
    {
        "id": 5,
        "name": "White Tower Bay",
        "description": "Secluded beach with historic watchtower backdrop",
        "image_url": "https://images.unsplash.com/photo-1495954484750-af469f2f9be5",
    },
    {
        "id": 6,
        "name": "Sliema & Exiles Beach",
        "description": "Urban beach perfect for evening BBQs",
        "image_url": "https://images.unsplash.com/photo-1490365728022-deae76380607",
    },
]

PACKAGES = [
    {
        "id": 1,
        "name": "BBQ Only",
        "description": "Just the BBQ setup, bring your own food",
        "price": Decimal("40"),
        "is_vegetarian": False,
        "includes_alcohol": False,
    },
    {
        "id": 2,
        "name": "BBQ + Food Package",
        "description": "4 Burgers, 4 Large Wings, 2 Steaks, 4 Sausages",
        "price": Decimal("70"),
        "is_vegetarian": False,
        "includes_alcohol": False,
    },
    {
        "id": 3,
        "name": "BBQ + Vegetarian Package",
        "description": "2 Burgers, 2 Wings, 2 Steaks, 2 Sausages, 2 Portabella Mushrooms, 2 Stuffed Peppers",
        "price": Decimal("70"),
        "is_vegetarian": True,
        "includes_alcohol": False,
    },
    {
        "id": 4,
        "name": "BBQ + Food & Alcohol",
        "description": "Standard food package plus selected alcohol beverages",
        "price": Decimal("100"),
        "is_vegetarian": False,
        "includes_alcohol": True,
    },
    {
        "id": 5,
        "name": "VIP Package",
        "description": "Premium food selection with dedicated service",
        "price": Decimal("190"),
        "is_vegetarian": False,
        "includes_alcohol": True,
    },
]


def get_location(location_id: int):
    return next((loc for loc in LOCATIONS if loc["id"] == location_id), None)


def get_package(package_id: int):
    return next((pkg for pkg in PACKAGES if pkg["id"] == package_id), None)


def find_location_by_name(name: str):
    wanted = name.strip().lower()
    return next((loc for loc in LOCATIONS if loc["name"].lower() == wanted), None)
