import os

# Keep app.main from creating tables or seeding against a real database on import
os.environ["ENV"] = "production"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MAPBOX_ACCESS_TOKEN"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.constants.enums import UserRole, StoreType, StaffRole, OrderStatus
from app.database import Base, get_db
from app.db.models.location import Location
from app.db.models.order import Order, OrderItem
from app.db.models.product import Product
from app.db.models.store import Store, StoreStaff, BusinessHours
from app.db.models.taxi_stand import TaxiStand
from app.db.models.user import User, StoreOwnerProfile, DriverProfile
from app.dependencies import create_access_token
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    def headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return headers


class Factory:
    """Inserts committed rows straight through the session"""

    def __init__(self, db):
        self.db = db
        self._seq = 0

    def _next(self):
        self._seq += 1
        return self._seq

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, role=UserRole.USER, **kwargs):
        n = self._next()
        data = {
            "email": f"user{n}@example.com",
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "phone": f"+25570000{n:04d}",
            "role": role,
            "is_active": True,
        }
        data.update(kwargs)
        return self._save(User(**data))

    def super_admin(self, **kwargs):
        return self.user(role=UserRole.SUPER_ADMIN, **kwargs)

    def city_admin(self, **kwargs):
        return self.user(role=UserRole.CITY_ADMIN, **kwargs)

    def store_owner(self, **kwargs):
        owner = self.user(role=UserRole.STORE_OWNER, **kwargs)
        self._save(StoreOwnerProfile(user_id=owner.id, business_name=f"Business {owner.id}"))
        self.db.refresh(owner)
        return owner

    def driver(self, **kwargs):
        user = self.user(role=UserRole.DRIVER, **kwargs)
        self._save(DriverProfile(user_id=user.id, license_number=f"DL-{user.id}"))
        self.db.refresh(user)
        return user

    def location(self, latitude=-6.7924, longitude=39.2083, address="Samora Avenue"):
        return self._save(Location(latitude=latitude, longitude=longitude, address=address, city="", country=""))

    def store(self, owner, latitude=-6.7924, longitude=39.2083, **kwargs):
        location = self.location(latitude, longitude)
        data = {
            "owner_id": owner.store_owner.id,
            "name": f"Store {self._next()}",
            "type": StoreType.GROCERY,
            "location_id": location.id,
            "contact_phone": "+255700000000",
            "contact_email": "store@example.com",
            "operating_hours": "Mon-Sat 08:00-20:00",
        }
        data.update(kwargs)
        return self._save(Store(**data))

    def product(self, store, **kwargs):
        data = {
            "store_id": store.id,
            "name": f"Product {self._next()}",
            "price": 1500.0,
            "category": "Beverages",
            "stock_quantity": 10,
            "min_stock_level": 2,
        }
        data.update(kwargs)
        return self._save(Product(**data))

    def staff(self, store, user, role=StaffRole.CASHIER):
        return self._save(StoreStaff(store_id=store.id, user_id=user.id, role=role))

    def business_hours(self, store, day_of_week, open_time="08:00", close_time="17:00"):
        return self._save(BusinessHours(
            store_id=store.id, day_of_week=day_of_week, open_time=open_time, close_time=close_time
        ))

    def order(self, store, customer, product=None):
        order = self._save(Order(store_id=store.id, user_id=customer.id, status=OrderStatus.PENDING, total_amount=0.0))
        if product is not None:
            self._save(OrderItem(order_id=order.id, product_id=product.id, quantity=1, unit_price=product.price))
        return order

    def taxi_stand(self, latitude, longitude, name=None, **kwargs):
        location = self.location(latitude, longitude, address="Stand")
        data = {"name": name or f"Stand {self._next()}", "capacity": 10, "location_id": location.id}
        data.update(kwargs)
        return self._save(TaxiStand(**data))


@pytest.fixture
def factory(db):
    return Factory(db)
