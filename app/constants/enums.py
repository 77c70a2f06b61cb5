"""
Enumerations shared by models and schemas
"""

from enum import Enum


class UserRole(str, Enum):
    USER = "USER"
    DRIVER = "DRIVER"
    STORE_OWNER = "STORE_OWNER"
    PLACE_OWNER = "PLACE_OWNER"
    EMERGENCY_RESPONDER = "EMERGENCY_RESPONDER"
    EMERGENCY_ADMIN = "EMERGENCY_ADMIN"
    CITY_ADMIN = "CITY_ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class StoreType(str, Enum):
    GROCERY = "GROCERY"
    PHARMACY = "PHARMACY"
    RESTAURANT = "RESTAURANT"
    RETAIL = "RETAIL"
    ELECTRONICS = "ELECTRONICS"
    OTHER = "OTHER"


class StaffRole(str, Enum):
    MANAGER = "MANAGER"
    CASHIER = "CASHIER"
    INVENTORY = "INVENTORY"
    DELIVERY = "DELIVERY"


class DriverApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"


class ServiceStatus(str, Enum):
    REQUESTED = "REQUESTED"
    ACCEPTED = "ACCEPTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    MOBILE_MONEY = "MOBILE_MONEY"
    WALLET = "WALLET"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    BULK_UPDATE = "BULK_UPDATE"
    CLOSURE_UPDATE = "CLOSURE_UPDATE"
    REPLACE_SCHEDULE = "REPLACE_SCHEDULE"
    STATUS_UPDATE = "STATUS_UPDATE"
    VERIFICATION_UPDATE = "VERIFICATION_UPDATE"
