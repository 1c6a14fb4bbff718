import enum


class Role(str, enum.Enum):
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    DELIVERY_PARTNER = "DELIVERY_PARTNER"


TENANT_ROLES = (Role.ADMIN, Role.CUSTOMER, Role.DELIVERY_PARTNER)
STAFF_ROLES = (Role.SUPERADMIN, Role.ADMIN)


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


CLOSED_ORDER_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CANCELLED = "CANCELLED"


class DeliveryFrequency(str, enum.Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


# Per-tenant storefront config keys
SITE_NAME_KEY = "SITE_NAME"
THEME_CONFIG_KEY = "THEME_CONFIG"
LANDING_PAGE_CONFIG_KEY = "LANDING_PAGE_CONFIG"
FOOTER_CONFIG_KEY = "FOOTER_CONFIG"
DEFAULT_SITE_NAME = "Fruitland"
