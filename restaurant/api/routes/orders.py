from fastapi import APIRouter, Depends

from restaurant.api.deps import get_current_user, get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import OrderCreate, OrderPaymentUpdate, OrderRead, OrderStatusUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.orders import OrderService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/order", tags=["orders"])


@router.post("", response_model=Envelope[OrderRead], status_code=201)
def create_order(
    payload: OrderCreate,
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user),
):
    order = OrderService(uow).create(payload, current_user.id)
    return ok(OrderRead.model_validate(order), 201)


@router.get("/{order_id}", response_model=Envelope[OrderRead])
def get_order(order_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(get_current_user)):
    return ok(OrderRead.model_validate(OrderService(uow).get(order_id)))


@router.patch("/{order_id}/status", response_model=Envelope[OrderRead])
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(require_staff),
):
    """Without a status a pending order moves to processing."""
    return ok(OrderRead.model_validate(OrderService(uow).update_status(order_id, payload)))


@router.patch("/{order_id}/payment", response_model=Envelope[OrderRead])
def update_order_payment(
    order_id: str,
    payload: OrderPaymentUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(get_current_user),
):
    return ok(OrderRead.model_validate(OrderService(uow).update_payment(order_id, payload)))
