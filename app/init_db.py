# init_db.py
import logging
import os

from app.constants.enums import UserRole
from app.database import engine, SessionLocal, Base
from app.db.models.service import ServiceType
from app.db.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_TYPES = [
    ("Standard Ride", "TAXI"),
    ("Premium Ride", "TAXI"),
    ("Package Delivery", "DELIVERY"),
    ("Food Delivery", "DELIVERY"),
    ("Moving", "MOVING"),
]

def seed():
    db = SessionLocal()
    try:
        # Seed super admin
        admin_email = os.getenv("SUPER_ADMIN_EMAIL", "admin@example.com")
        if not db.query(User).filter(User.role == UserRole.SUPER_ADMIN).first():
            db.add(User(
                email=admin_email,
                first_name="Super",
                last_name="Admin",
                role=UserRole.SUPER_ADMIN,
                is_active=True,
                is_verified=True,
            ))
            logger.info(f"Seeded super admin {admin_email}")

        # Seed service types
        existing = {name for (name,) in db.query(ServiceType.name)}
        for name, category in DEFAULT_SERVICE_TYPES:
            if name not in existing:
                db.add(ServiceType(name=name, category=category))

        db.commit()
    finally:
        db.close()

def init():
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created")
    seed()
    logger.info("Seed data added")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init()
