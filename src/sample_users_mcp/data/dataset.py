"""Read-only, in-memory dataset of users and orders.

Executors receive a ``Dataset`` handle explicitly; there is no module-level
instance. All collections are immutable, so concurrent readers need no locks.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Tuple, TypeVar

from pydantic import ValidationError

from .models import Order, User
from .sample_data import SAMPLE_ORDERS, SAMPLE_USERS
from ..core.exceptions import DatasetLoadError
from ..core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of fetching one entity by id. A miss is a value, not an exception."""

    value: Optional[T] = None

    @property
    def found(self) -> bool:
        return self.value is not None


class Dataset:
    """Users keyed by id and orders in their original order."""

    def __init__(self, users: Iterable[User], orders: Iterable[Order]) -> None:
        """Build the dataset and check its referential integrity.

        Raises:
            DatasetLoadError: On duplicate ids or orders pointing at unknown users.
        """
        user_map: dict[str, User] = {}
        for user in users:
            if user.id in user_map:
                raise DatasetLoadError(f"Duplicate user id '{user.id}'.")
            user_map[user.id] = user

        order_list: list[Order] = []
        seen_orders: set[str] = set()
        for order in orders:
            if order.id in seen_orders:
                raise DatasetLoadError(f"Duplicate order id '{order.id}'.")
            if order.user_id not in user_map:
                raise DatasetLoadError(f"Order '{order.id}' references unknown user '{order.user_id}'.")
            seen_orders.add(order.id)
            order_list.append(order)

        self._users: Mapping[str, User] = MappingProxyType(user_map)
        self._orders: Tuple[Order, ...] = tuple(order_list)
        logger.debug("Dataset ready with %d user(s) and %d order(s).", len(self._users), len(self._orders))

    @classmethod
    def sample(cls) -> "Dataset":
        """The built-in sample data."""
        return cls.from_mapping({"users": SAMPLE_USERS, "orders": SAMPLE_ORDERS})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Dataset":
        """Build a dataset from ``{"users": {id: fullName}, "orders": [{id, name, userId}]}``.

        Raises:
            DatasetLoadError: If the document does not have that shape.
        """
        raw_users = data.get("users", {})
        raw_orders = data.get("orders", [])
        if not isinstance(raw_users, Mapping) or not isinstance(raw_orders, list):
            raise DatasetLoadError("Dataset needs a 'users' object and an 'orders' list.")

        try:
            users = [User(id=user_id, full_name=full_name) for user_id, full_name in raw_users.items()]
            orders = [Order.model_validate(raw) for raw in raw_orders]
        except ValidationError as e:
            raise DatasetLoadError(f"Malformed dataset record: {e}") from e
        return cls(users, orders)

    @classmethod
    def from_file(cls, path: str | Path) -> "Dataset":
        """Load a dataset from a JSON file.

        Raises:
            DatasetLoadError: If the file cannot be read, parsed or validated.
        """
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DatasetLoadError(f"Cannot load dataset from {file_path}: {e}") from e
        if not isinstance(data, dict):
            raise DatasetLoadError(f"Dataset file {file_path} must contain a JSON object.")
        logger.info("Loading dataset from %s", file_path)
        return cls.from_mapping(data)

    def list_users(self) -> Tuple[User, ...]:
        return tuple(self._users.values())

    def get_user(self, user_id: str) -> Lookup[User]:
        return Lookup(self._users.get(user_id))

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    def list_orders(self) -> Tuple[Order, ...]:
        return self._orders

    def get_order(self, order_id: str) -> Lookup[Order]:
        for order in self._orders:
            if order.id == order_id:
                return Lookup(order)
        return Lookup()

    def filter_orders(self, predicate: Callable[[Order], bool]) -> Tuple[Order, ...]:
        return tuple(order for order in self._orders if predicate(order))

    def orders_for_user(self, user_id: str) -> Tuple[Order, ...]:
        return self.filter_orders(lambda order: order.user_id == user_id)

    def search_orders(self, query: str) -> Tuple[Order, ...]:
        """Orders whose name contains ``query``, ignoring case."""
        needle = query.casefold()
        return self.filter_orders(lambda order: needle in order.name.casefold())
