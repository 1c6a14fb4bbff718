from .base import Base
from .tenant import Tenant
from .user import User
from .user_tenant import UserTenant
from .product import Product
from .cart import CartItem
from .address import Address
from .warehouse import Warehouse, ProductStock
from .subscription import SubscriptionPackage, Subscription
from .order import Order, OrderItem
from .loyalty import LoyaltyTransaction
from .store_config import StoreConfig
