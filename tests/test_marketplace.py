# PHM/backend/tests/test_marketplace.py : crops, facilities, vehicles, dashboard

import pytest
from fastapi.testclient import TestClient
from phm.main import create_app


class TestCrops:
    @pytest.fixture(autouse=True)
    def setup(self, client, make_user):
        self.client = client
        self.farmer_id, self.headers = make_user("farmer@test.com")

    def _create_crop(self, name="Maize", price=300, **extra):
        body = {"name": name, "farmer": self.farmer_id, "quantity": 100, "price": price,
                "location": "Kigali", "quality": "Grade A"}
        body.update(extra)
        response = self.client.post("/crops/", json=body)
        assert response.status_code == 201
        return response.json()["cropId"]

    def test_create_crop_is_available(self):
        crop_id = self._create_crop()
        crop = self.client.get(f"/crops/{crop_id}").json()
        assert crop["status"] == "available"
        assert crop["farmer"] == self.farmer_id
        assert crop["unit"] == "kg"

    def test_create_crop_missing_price(self):
        response = self.client.post("/crops/", json={"name": "Maize", "farmer": self.farmer_id, "quantity": 1})
        assert response.status_code == 400

    def test_create_crop_unknown_farmer(self):
        response = self.client.post("/crops/", json={"name": "Maize", "farmer": 999, "quantity": 1, "price": 1})
        assert response.status_code == 404

    def test_list_with_filters(self):
        self._create_crop("Yellow maize", price=300)
        self._create_crop("Beans", price=900)
        self._create_crop("White Maize", price=500)

        assert len(self.client.get("/crops/").json()) == 3
        maize = self.client.get("/crops/", params={"name": "maize", "maxPrice": 400}).json()
        assert [c["name"] for c in maize] == ["Yellow maize"]
        expensive = self.client.get("/crops/", params={"minPrice": 450}).json()
        assert [c["name"] for c in expensive] == ["Beans", "White Maize"]

    def test_update_status_to_sold(self):
        crop_id = self._create_crop()
        response = self.client.put(f"/crops/{crop_id}", json={"status": "sold"})
        assert response.status_code == 200
        assert response.json()["status"] == "sold"
        assert response.json()["name"] == "Maize"

        sold = self.client.get("/crops/", params={"status": "sold"}).json()
        assert [c["id"] for c in sold] == [crop_id]

    @pytest.mark.parametrize("field", ["name", "quantity", "price", "status", "unit"])
    def test_update_with_null_is_rejected(self, field):
        crop_id = self._create_crop()
        response = self.client.put(f"/crops/{crop_id}", json={field: None})
        assert response.status_code == 400

        # The crop is untouched and the session still usable
        crop = self.client.get(f"/crops/{crop_id}").json()
        assert crop["name"] == "Maize"
        assert crop["status"] == "available"

    def test_update_unknown_crop(self):
        response = self.client.put("/crops/999", json={"price": 10})
        assert response.status_code == 404

    def test_delete_crop(self):
        crop_id = self._create_crop()
        assert self.client.delete(f"/crops/{crop_id}").status_code == 200
        assert self.client.get(f"/crops/{crop_id}").status_code == 404


class TestFacilities:
    @pytest.fixture(autouse=True)
    def setup(self, client, make_user):
        self.client = client
        self.keeper_id, _ = make_user("keeper@test.com", "storage")
        self.carrier_id, _ = make_user("carrier@test.com", "transporter")

    def test_new_storage_is_fully_available(self):
        storage_id = self.client.post("/storage/", json={
            "name": "Barn", "provider": self.keeper_id, "capacity": 80, "pricePerTon": 5000,
        }).json()["storageId"]
        storage = self.client.get(f"/storage/{storage_id}").json()
        assert storage["available"] == 80
        assert storage["capacity"] == 80
        assert storage["features"] == []

    def test_storage_requires_positive_capacity(self):
        response = self.client.post("/storage/", json={
            "name": "Barn", "provider": self.keeper_id, "capacity": 0, "pricePerTon": 5000,
        })
        assert response.status_code == 400

    def test_storage_filters(self):
        self.client.post("/storage/", json={
            "name": "Cold Room", "provider": self.keeper_id, "location": "Musanze", "capacity": 100,
            "pricePerTon": 12000, "features": ["Cold storage", "24/7 security"],
        })
        self.client.post("/storage/", json={
            "name": "Dry Barn", "provider": self.keeper_id, "location": "Huye", "capacity": 10,
            "pricePerTon": 4000, "features": ["Pest control"],
        })

        cold = self.client.get("/storage/", params={"feature": "Cold storage"}).json()
        assert [s["name"] for s in cold] == ["Cold Room"]
        assert cold[0]["features"] == ["Cold storage", "24/7 security"]
        big = self.client.get("/storage/", params={"minAvailable": 50}).json()
        assert [s["name"] for s in big] == ["Cold Room"]
        assert len(self.client.get("/storage/", params={"provider": self.keeper_id}).json()) == 2

    def test_unknown_storage(self):
        assert self.client.get("/storage/999").status_code == 404

    def test_new_transport_is_available(self):
        transport_id = self.client.post("/transport/", json={
            "name": "Pickup", "provider": self.carrier_id, "capacity": 1, "pricePerKm": 300,
            "vehicleType": "Pickup",
        }).json()["transportId"]
        transport = self.client.get(f"/transport/{transport_id}").json()
        assert transport["availability"] == "Available"
        assert transport["vehicleType"] == "Pickup"

    def test_transport_filters(self):
        for name, capacity, vehicle in [("Pickup", 1, "Pickup"), ("Big Truck", 10, "Large truck")]:
            self.client.post("/transport/", json={
                "name": name, "provider": self.carrier_id, "capacity": capacity, "pricePerKm": 500,
                "vehicleType": vehicle,
            })
        result = self.client.get("/transport/", params={"minCapacity": 5, "availability": "Available"}).json()
        assert [t["name"] for t in result] == ["Big Truck"]
        result = self.client.get("/transport/", params={"vehicleType": "Pickup"}).json()
        assert [t["name"] for t in result] == ["Pickup"]


class TestDashboard:
    @pytest.fixture(autouse=True)
    def setup(self, client, make_user):
        self.client = client
        self.make_user = make_user

    @pytest.mark.parametrize("user_type, variant", [
        ("farmer", "farmer-buyer"),
        ("buyer", "farmer-buyer"),
        ("storage", "storage-provider"),
        ("transporter", "transporter"),
        ("cooperative", "cooperative"),
    ])
    def test_variant_per_user_type(self, user_type, variant):
        _, headers = self.make_user(f"{user_type}@test.com", user_type)
        response = self.client.get("/dashboard/", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["variant"] == variant
        assert data["path"] == f"/dashboard/{variant}"
        assert data["user"]["userType"] == user_type

    def test_storage_provider_summary(self):
        keeper_id, headers = self.make_user("keeper@test.com", "storage")
        farmer_id, _ = self.make_user("farmer@test.com", "farmer")
        storage_id = self.client.post("/storage/", json={
            "name": "Barn", "provider": keeper_id, "capacity": 100, "pricePerTon": 1000,
        }).json()["storageId"]
        crop_id = self.client.post("/crops/", json={
            "name": "Beans", "farmer": farmer_id, "quantity": 20, "price": 800,
        }).json()["cropId"]
        self.client.post("/bookings/storage", json={
            "storage": storage_id, "farmer": farmer_id, "crop": crop_id, "quantity": 25,
            "startDate": "2025-01-01T00:00:00", "endDate": "2025-01-11T00:00:00",
        })

        summary = self.client.get("/dashboard/", headers=headers).json()["summary"]
        assert summary["facilities"] == 1
        assert summary["total_available"] == 75
        assert summary["occupancy_rate"] == 25
        assert summary["bookings"] == {"pending": 1}


class TestService:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_contact(self, client):
        response = client.post("/contact/", json={
            "name": "Amina", "email": "amina@test.com", "message": "Do you store coffee?",
        })
        assert response.status_code == 200
        assert response.json()["message"] == "Message sent successfully"

    def test_contact_missing_message(self, client):
        response = client.post("/contact/", json={"name": "Amina", "email": "amina@test.com"})
        assert response.status_code == 400

    def test_unexpected_error_is_generic_500(self):
        app = create_app("sqlite://")

        @app.get("/broken")
        def broken():
            raise RuntimeError("database exploded")

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/broken")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
