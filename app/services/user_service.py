from typing import List

from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.user import UserModel
from app.domain.errors import NotFoundError, ValidationFailure
from app.domain.schemas import UserCreate, UserRead, UserUpdate
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _to_read(user: UserModel) -> UserRead:
    return UserRead(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        cart_id=user.cart.id if user.cart else None,
    )


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        if self.repo.get_by_email(payload.email):
            raise ValidationFailure("Email already registered")

        #koszyk powstaje razem z userem
        user = UserModel(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=payload.role,
            cart=CartModel(),
        )
        created = self.repo.create_user(user)
        logger.info(f"User {created.id} created with cart {created.cart.id}")
        return _to_read(created)

    def list_users(self) -> List[UserRead]:
        return [_to_read(u) for u in self.repo.list_users()]

    def get_user(self, user_id: int) -> UserRead:
        return _to_read(self._get(user_id))

    def update_user(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self._get(user_id)
        data = payload.model_dump(exclude_unset=True)

        email = data.get("email")
        if email and email != user.email and self.repo.get_by_email(email):
            raise ValidationFailure("Email already registered")

        for key, value in data.items():
            if value is not None:
                setattr(user, key, value)

        return _to_read(self.repo.save(user))

    def delete_user(self, user_id: int):
        user = self._get(user_id)
        self.repo.delete_user(user)
        logger.info(f"User {user_id} deleted")

    def _get(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
