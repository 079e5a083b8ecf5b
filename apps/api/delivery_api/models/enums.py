"""
Enumerations shared by models, schemas and the authorization policy.
"""
import enum


class UserRole(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    MASTER = "MASTER"
    ANONYMOUS = "ANONYMOUS"


# Roles allowed to manage any restaurant regardless of ownership
STAFF_ROLES = frozenset({UserRole.MANAGER, UserRole.MASTER})


class OrderType(str, enum.Enum):
    DELIVERY = "DELIVERY"
    TAKEOUT = "TAKEOUT"


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"


class PaymentMethod(str, enum.Enum):
    CARD = "CARD"
    CASH = "CASH"


class PaymentStatus(str, enum.Enum):
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
