from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Enum
from datetime import datetime
from app.database import Base
from sqlalchemy.orm import relationship
from app.constants.enums import ServiceStatus, PaymentMethod, PaymentStatus

class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=True)  # e.g. "TAXI", "DELIVERY", "MOVING"

class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("driver_profiles.id"), nullable=True)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    status = Column(Enum(ServiceStatus), nullable=False, default=ServiceStatus.REQUESTED)
    final_price = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="services")
    service_type = relationship("ServiceType")

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)
    amount = Column(Float, nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="payments")

class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    reviewer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("driver_profiles.id"), nullable=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)
    rating = Column(Integer, nullable=False)  # 1-5 overall
    punctuality_rating = Column(Integer, nullable=True)
    cleanliness_rating = Column(Integer, nullable=True)
    safety_rating = Column(Integer, nullable=True)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    reviewer = relationship("User", back_populates="reviews")
    driver = relationship("DriverProfile", back_populates="reviews")
