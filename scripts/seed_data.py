# PHM/backend/scripts/seed_data.py : demo data for local development

#!/usr/bin/env python
"""Fill the database with demo users, crops, storage facilities and vehicles"""

import random
import sys
import os
from datetime import datetime, timedelta
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from phm import config
from phm.auth import hash_password
from phm.constants import AVAILABLE
from phm.database import Database
from phm.models import models
from phm.models.models import UserType, CropStatus

LOCATIONS = ["Kigali", "Musanze", "Huye", "Rubavu", "Nyagatare"]
CROPS = [("Maize", "kg"), ("Beans", "kg"), ("Irish potatoes", "kg"), ("Rice", "kg"), ("Cassava", "kg")]
QUALITIES = ["Grade A", "Grade B", "Standard"]
STORAGE_FEATURES = ["Cold storage", "Pest control", "24/7 security", "Humidity control", "Loading dock"]
VEHICLES = ["Pickup", "Small truck", "Large truck", "Refrigerated truck"]
TRANSPORT_FEATURES = ["Refrigeration", "GPS tracking", "Insurance", "Covered"]


def _user(name, email, user_type):
    return models.User(
        name=name,
        email=email,
        password_hash=hash_password("demo1234"),
        phone=f"+2507{random.randint(10000000, 99999999)}",
        location=random.choice(LOCATIONS),
        user_type=user_type,
    )


def generate_test_data(database: Database):
    """Create one user per type, then listings owned by them"""
    db = database.session()
    try:
        farmer = _user("Demo Farmer", "farmer@phm.demo", UserType.FARMER)
        buyer = _user("Demo Buyer", "buyer@phm.demo", UserType.BUYER)
        keeper = _user("Demo Storage", "storage@phm.demo", UserType.STORAGE_PROVIDER)
        carrier = _user("Demo Transporter", "transport@phm.demo", UserType.TRANSPORTER)
        coop = _user("Demo Cooperative", "coop@phm.demo", UserType.COOPERATIVE)
        db.add_all([farmer, buyer, keeper, carrier, coop])
        db.commit()

        for i in range(10):
            name, unit = random.choice(CROPS)
            db.add(models.Crop(
                name=name,
                farmer=farmer.id,
                location=random.choice(LOCATIONS),
                quantity=random.randint(100, 5000),
                unit=unit,
                price=random.randint(200, 1500),
                quality=random.choice(QUALITIES),
                harvest_date=datetime.utcnow() - timedelta(days=random.randint(1, 60)),
                status=CropStatus.AVAILABLE,
            ))

        for i in range(4):
            capacity = random.choice([50, 100, 250, 500])
            db.add(models.Storage(
                name=f"Warehouse {i + 1}",
                provider=keeper.id,
                location=random.choice(LOCATIONS),
                capacity=capacity,
                available=capacity,
                price_per_ton=random.choice([5000, 8000, 12000]),
                features=random.sample(STORAGE_FEATURES, 2),
            ))

        for i in range(4):
            db.add(models.Transport(
                name=f"Vehicle {i + 1}",
                provider=carrier.id,
                location=random.choice(LOCATIONS),
                vehicle_type=random.choice(VEHICLES),
                capacity=random.choice([1, 3, 5, 10]),
                price_per_km=random.choice([300, 500, 800]),
                availability=AVAILABLE,
                features=random.sample(TRANSPORT_FEATURES, 2),
            ))

        db.commit()
        print("✅ Demo data generated (password for every account: demo1234)")
    finally:
        db.close()


if __name__ == "__main__":
    database = Database(config.DATABASE_URL)
    database.create_tables()
    generate_test_data(database)
    database.close()
