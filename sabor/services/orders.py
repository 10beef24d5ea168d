"""
Order Ledger and Status Machine

Creating an order prices it against the current drink catalog, stores it
and appends exactly one ``entrada`` financial record for its total.

Status workflow: pendente → preparando → pronta → entregue, with
cancelado meant for pendente orders. Transitions are not enforced: any
status may be set from any other. Marking an order delivered forces
``entregue`` whatever the current status.
"""

import logging
from datetime import datetime
from typing import Optional

from sabor.core.exceptions import (
    InvalidQuantityError,
    MissingFieldsError,
    MissingOrderIdError,
    OrderNotFoundError,
)
from sabor.schemas import (
    CreateOrderRequest,
    FinancialRecord,
    MarmitaSize,
    Order,
    OrderItem,
    OrderStatus,
    RecordType,
)
from sabor.services.ids import new_id
from sabor.services.pricing import compute_order_total
from sabor.services.storage.base import BaseStore

logger = logging.getLogger(__name__)


def revenue_description(order: Order) -> str:
    """``"Marmita {size} (Salada, Torresmo, Talheres) - {customer}"``, extras only when chosen."""
    options = order.item.options
    extras = [
        label
        for label, chosen in (
            ("Salada", options.salada),
            ("Torresmo", options.torresmo),
            ("Talheres", options.talheres),
        )
        if chosen
    ]
    extras_text = f" ({', '.join(extras)})" if extras else ""
    return f"Marmita {order.item.size.value}{extras_text} - {order.customer_name}"


class OrderService:
    """Order intake, listing and status updates against a store."""

    def __init__(self, store: BaseStore):
        self.store = store

    async def create_order(
        self,
        request: CreateOrderRequest,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Price, store and book a new order.

        Raises:
            MissingFieldsError: If item, address, customer or payment data is missing
            InvalidQuantityError: If quantidade < 1
            InvalidSizeError: If the size is not pequena, media or grande
        """
        if (
            request.item is None
            or request.address is None
            or not request.customer_name
            or not request.customer_phone
            or not request.payment_method
        ):
            raise MissingFieldsError()

        options = request.item.options
        if options.quantidade < 1:
            raise InvalidQuantityError()

        now = now or datetime.now()

        async with self.store.lock:
            catalog = await self.store.list_drinks()
            prices = compute_order_total(
                request.item.size,
                options.quantidade,
                options.drinks,
                catalog,
            )

            order = Order(
                id=new_id("order"),
                item=OrderItem(
                    size=MarmitaSize(request.item.size),
                    options=options,
                    unit_price=prices.unit_price,
                    drinks_total=prices.drinks_total,
                    total_price=prices.total_price,
                ),
                address=request.address,
                customer_name=request.customer_name,
                customer_phone=request.customer_phone,
                total=prices.total_price,
                status=OrderStatus.PENDENTE,
                payment_method=request.payment_method,
                delivered=False,
                created_at=now,
                updated_at=now,
            )
            record = FinancialRecord(
                id=new_id("finance"),
                order_id=order.id,
                amount=order.total,
                type=RecordType.ENTRADA,
                description=revenue_description(order),
                date=now,
            )

            await self.store.create_order(order, [record])

        logger.info(f"Order {order.id} created for {order.customer_name}: R$ {order.total:.2f}")
        return order

    async def list_orders(self) -> list[Order]:
        """All orders, newest first."""
        orders = await self.store.list_orders()
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def get_order(self, order_id: str) -> Order:
        order = await self.store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError()
        return order

    async def update_status(
        self,
        order_id: Optional[str],
        status: Optional[OrderStatus] = None,
        delivered: Optional[bool] = None,
    ) -> Order:
        """
        Apply a status and/or delivered change.

        ``status`` is applied first; ``delivered=True`` then overrides it
        with ``entregue``. ``updated_at`` is refreshed on every call.

        Raises:
            MissingOrderIdError: If no order id is given
            OrderNotFoundError: If the id is unknown
        """
        if not order_id:
            raise MissingOrderIdError()

        async with self.store.lock:
            order = await self.store.get_order(order_id)
            if order is None:
                raise OrderNotFoundError()

            previous = order.status
            order.updated_at = datetime.now()

            if status is not None:
                order.status = OrderStatus(status)

            if delivered is not None:
                order.delivered = delivered
                if delivered:
                    order.status = OrderStatus.ENTREGUE

            await self.store.save_order(order)

        logger.info(
            f"Order {order.id}: {previous.value} → {order.status.value} "
            f"(delivered={order.delivered})"
        )
        return order
