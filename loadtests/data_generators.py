"""Faker-based payloads matching the storefront API request schemas."""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

ADMIN_ID = "admin"


def principal(prefix: str) -> str:
    return f"{prefix}-lt-{uuid.uuid4().hex[:8]}"


def headers(user_id: str) -> dict:
    return {"X-User-Id": user_id}


def buyer_data() -> dict:
    return {
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "phone": f"9{random.randint(100000000, 999999999)}",
    }


def address_data(is_default: bool = False) -> dict:
    return {
        "label": random.choice(["Home", "Work", "Other"]),
        "street": fake.street_address()[:255],
        "district": fake.city()[:100],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zip_code": fake.postcode(),
        "country": "India",
        "is_default": is_default,
    }


def seller_application() -> dict:
    blob = "https://blobs.example.com/lt"
    return {
        "shop_name": f"{fake.company()[:200]} Store",
        "gst_number": f"{random.randint(10, 37)}{uuid.uuid4().hex[:10].upper()}1Z{random.randint(0, 9)}",
        "address": {
            "street": fake.street_address()[:255],
            "city": fake.city()[:100],
            "state": fake.state()[:100],
            "zip_code": fake.postcode(),
            "country": "India",
        },
        "documents": {
            "pan_card_front": f"{blob}/{uuid.uuid4().hex}.png",
            "pan_card_back": f"{blob}/{uuid.uuid4().hex}.png",
            "aadhar_card_front": f"{blob}/{uuid.uuid4().hex}.png",
            "aadhar_card_back": f"{blob}/{uuid.uuid4().hex}.png",
        },
    }


def product_data(stock: int | None = None) -> dict:
    return {
        "name": f"{fake.color_name()} {random.choice(['Saree', 'Kurta', 'Shawl', 'Dupatta', 'Stole'])}",
        "description": fake.sentence(),
        "category": random.choice(["Sarees", "Menswear", "Accessories"]),
        "price": round(random.uniform(99, 4999), 2),
        "stock": stock if stock is not None else random.randint(5, 50),
    }
