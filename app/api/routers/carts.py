#app/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import CartItemIn, CartOut, CartSyncOut
from app.services.cart_service import CartService

#koszyk jest zawsze koszykiem konkretnego usera, user_id jawnie w sciezce
router = APIRouter(prefix="/users/{user_id}/cart", tags=["carts"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(user_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_cart(user_id)


@router.post("/items", response_model=CartOut)
def add_item(user_id: int, payload: CartItemIn, db: Session = Depends(get_db)):
    return get_service(db).add_item(
        user_id=user_id,
        product_id=payload.product_id,
        quantity=payload.product_quantity,
    )


@router.put("", response_model=CartSyncOut)
def sync_cart(user_id: int, payload: List[CartItemIn], db: Session = Depends(get_db)):
    """
    Uzgadnia koszyk z lista od klienta. Ilosc 0 usuwa produkt,
    produkty spoza listy zostaja bez zmian.
    """
    changes = get_service(db).sync_cart(
        user_id,
        [(i.product_id, i.product_quantity) for i in payload],
    )
    return CartSyncOut(
        message="cart updated successfully",
        created=len(changes.creates),
        updated=len(changes.updates),
        deleted=len(changes.deletes),
    )


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(user_id: int, product_id: int, db: Session = Depends(get_db)):
    return get_service(db).remove_item(user_id, product_id)


@router.delete("")
def clear_cart(user_id: int, db: Session = Depends(get_db)):
    get_service(db).clear_cart(user_id)
    return {"message": "Cart cleared successfully"}
