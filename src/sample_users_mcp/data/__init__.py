"""In-memory dataset consumed by the tool executors."""

from .dataset import Dataset, Lookup
from .models import Order, User

__all__ = ["Dataset", "Lookup", "Order", "User"]
