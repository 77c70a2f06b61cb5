from .location import Location
from .user import User, DriverProfile, StoreOwnerProfile
from .store import Store, StoreStaff, BusinessHours
from .product import Product
from .order import Order, OrderItem
from .taxi_stand import TaxiStand
from .service import ServiceType, Service, Payment, Review
from .engagement import FavoriteLocation, Notification
from .audit_log import AuditLog

__all__ = [
    'Location', 'User', 'DriverProfile', 'StoreOwnerProfile', 'Store', 'StoreStaff',
    'BusinessHours', 'Product', 'Order', 'OrderItem', 'TaxiStand', 'ServiceType',
    'Service', 'Payment', 'Review', 'FavoriteLocation', 'Notification', 'AuditLog',
]
