# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import OrderItemOut, OrderOut
from app.services.order_service import OrderService

#zamowienia powstaja w /payments/create-payment-intent
router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("/", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db)):
    return get_service(db).list_orders()


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_order(order_id)


@router.get("/{order_id}/items", response_model=List[OrderItemOut])
def get_order_items(order_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_order_items(order_id)


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_order(order_id)
    return Response(status_code=204)
