"""Order store: checkout snapshots, newest first. Not persisted."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Union

from buyway.shared.domain.models import CartItem, Order, OrderStatus, PaymentMethod
from buyway.shared.domain.stores.base import EntityStore

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_uppercase
ID_LENGTH = 9
DEFAULT_DELIVERY_DAYS = 5

Clock = Callable[[], datetime]


def generate_id(prefix: str, length: int = ID_LENGTH) -> str:
    """Random uppercase base-36 identifier. No collision check."""
    return prefix + "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def format_order_date(moment: datetime) -> str:
    """``19 Oct 2026``"""
    return f"{moment.day} {moment.strftime('%b')} {moment.year}"


def format_delivery_date(moment: datetime) -> str:
    """``24 Oct``"""
    return f"{moment.day} {moment.strftime('%b')}"


class OrderStore(EntityStore[Order]):
    """Placed orders. Starts empty on every process start."""

    name = "orders"

    def __init__(
        self,
        clock: Optional[Clock] = None,
        delivery_days: int = DEFAULT_DELIVERY_DAYS,
        id_prefix: str = "ORD-",
    ) -> None:
        super().__init__()
        self._clock = clock or datetime.now
        self.delivery_days = delivery_days
        self.id_prefix = id_prefix

    def place_order(
        self,
        items: Iterable[CartItem],
        total_amount: float,
        address: str,
        payment_method: PaymentMethod,
    ) -> Order:
        """Record a new order and return it.

        The items are deep-copied, so later changes to the caller's list or to
        the cart never reach the stored order. ``payment_method`` is expected to
        be checked already (see ``CheckoutService``); the Order model only
        coerces its value into the enum.
        """
        placed_at = self._clock()
        estimated_delivery_at = placed_at + timedelta(days=self.delivery_days)

        order = Order(
            id=generate_id(self.id_prefix),
            items=[item.model_copy(deep=True) for item in items],
            total_amount=total_amount,
            address=address,
            payment_method=payment_method,
            status=OrderStatus.PROCESSING,
            date=format_order_date(placed_at),
            estimated_delivery=format_delivery_date(estimated_delivery_at),
            placed_at=placed_at,
            estimated_delivery_at=estimated_delivery_at,
        )

        self._items.insert(0, order)
        logger.info(f"Placed order {order.id}: {order.item_count} item(s), total {total_amount}")
        self._commit()
        return order.model_copy(deep=True)

    def update_status(self, order_id: str, status: Union[OrderStatus, str]) -> None:
        """Move an order to another status (admin or simulated flows)."""
        for order in self._items:
            if order.id == order_id:
                order.status = OrderStatus(status)
                logger.info(f"Order {order_id} is now {order.status.value}")
                self._commit()
                return
        self._not_found("update_status", order_id)

    def get_by_id(self, order_id: str) -> Optional[Order]:
        for order in self._items:
            if order.id == order_id:
                return order.model_copy(deep=True)
        return None

    def get_revenue(self) -> float:
        return sum(order.total_amount for order in self._items)
