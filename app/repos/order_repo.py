# app/repos/order_repo.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(
                selectinload(OrderModel.items),
                selectinload(OrderModel.shipping_address),
            )
        ).scalar_one_or_none()

    def get_by_payment_intent(self, payment_intent_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.stripe_payment_intent_id == payment_intent_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_orders(self) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
                .options(
                    selectinload(OrderModel.items),
                    selectinload(OrderModel.shipping_address),
                )
            ).scalars()
        )

    def transition_status(self, payment_intent_id: str, from_status: str, to_status: str) -> int:
        """
        Warunkowy update po unikalnym kluczu - bez okna read-then-write.
        Zwraca liczbe zmienionych wierszy (0 albo 1).
        """
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.stripe_payment_intent_id == payment_intent_id,
                OrderModel.status == from_status,
            )
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_order(self, order: OrderModel):
        self.db.delete(order)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
