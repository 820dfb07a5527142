from decimal import Decimal

from restaurant.application.errors import BadRequestError, NotFoundError
from restaurant.application.schemas import OrderCreate, OrderPaymentUpdate, OrderStatusUpdate
from restaurant.domain.models import Order, OrderMenu
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)

FINAL_STATUSES = ("success", "failed")


class OrderService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def get(self, order_id: str) -> Order:
        order = self.uow.orders.get(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def create(self, data: OrderCreate, user_id: str) -> Order:
        with self.uow:
            amount = Decimal("0")
            order = Order(user_id=user_id, status="pending", payment_status="unpaid")
            for item in data.items:
                menu = self.uow.menus.get(item.menu_id)
                if not menu:
                    raise NotFoundError("Menu not found")
                amount += Decimal(str(menu.price)) * item.quantity
                order.items.append(OrderMenu(menu_id=menu.id, quantity=item.quantity))
            order.amount = amount
            order = self.uow.orders.add(order)
        logger.info(
            "Order created",
            extra={"extra_fields": {"order_id": order.id, "amount": str(amount), "items": len(data.items)}},
        )
        return order

    def update_status(self, order_id: str, data: OrderStatusUpdate) -> Order:
        with self.uow:
            order = self.get(order_id)
            if order.status in FINAL_STATUSES:
                raise BadRequestError(f"Invalid update status, status already '{order.status}'")
            status = data.status
            if status is None:
                if order.status != "pending":
                    raise BadRequestError("Invalid status, must include success or cancel")
                status = "processing"
            order.status = status
            order = self.uow.orders.save(order)
        logger.info("Order status changed", extra={"extra_fields": {"order_id": order.id, "status": order.status}})
        return order

    def update_payment(self, order_id: str, data: OrderPaymentUpdate) -> Order:
        with self.uow:
            order = self.get(order_id)
            order.payment_method = data.payment_method
            if data.payment_method:
                order.payment_status = "paid"
                order.status = "success"
            else:
                order.payment_status = "unpaid"
            order = self.uow.orders.save(order)
        return order
