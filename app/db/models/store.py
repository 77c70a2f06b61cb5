from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Enum, UniqueConstraint
from datetime import datetime
from app.database import Base
from sqlalchemy.orm import relationship
from app.constants.enums import StoreType, StaffRole

class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("store_owner_profiles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(Enum(StoreType), nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    contact_phone = Column(String, nullable=False)
    contact_email = Column(String, nullable=False)
    operating_hours = Column(Text, nullable=True)  # free-form text, BusinessHours holds the schedule
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    is_temporarily_closed = Column(Boolean, default=False)
    closure_reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("StoreOwnerProfile", back_populates="stores")
    location = relationship("Location")
    products = relationship("Product", back_populates="store", cascade="all, delete-orphan")
    staff = relationship("StoreStaff", back_populates="store", cascade="all, delete-orphan")
    business_hours = relationship(
        "BusinessHours",
        back_populates="store",
        order_by="BusinessHours.day_of_week",
        cascade="all, delete-orphan",
    )
    orders = relationship("Order", back_populates="store")

    def __repr__(self):
        return f"<Store(id={self.id}, name='{self.name}', type='{self.type}')>"

class StoreStaff(Base):
    __tablename__ = "store_staff"
    __table_args__ = (UniqueConstraint("store_id", "user_id", name="uq_store_staff_store_user"),)

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    role = Column(Enum(StaffRole), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store = relationship("Store", back_populates="staff")
    user = relationship("User")

class BusinessHours(Base):
    __tablename__ = "business_hours"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    open_time = Column(String(5), nullable=False)  # HH:MM
    close_time = Column(String(5), nullable=False)
    is_closed = Column(Boolean, default=False)

    store = relationship("Store", back_populates="business_hours")
