from decimal import Decimal

from app.data.models import (
    CartItemModel,
    CartModel,
    CategoryModel,
    OrderItemModel,
    OrderModel,
    OrderStatus,
    ProductModel,
    ShippingAddressModel,
    UserModel,
)


def make_user(db, email="ada@lovelace.io", with_cart=True):
    user = UserModel(
        email=email,
        first_name="Ada",
        last_name="Lovelace",
        cart=CartModel() if with_cart else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_product(db, name="Keyboard", price="19.99", category=None):
    product = ProductModel(
        name=name,
        description=f"{name} description",
        price=Decimal(price),
        stock=10,
        category=category,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def make_category(db, name="Peripherals"):
    category = CategoryModel(name=name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def put_in_cart(db, user, product_id, quantity):
    db.add(CartItemModel(cart_id=user.cart.id, product_id=product_id, quantity=quantity))
    db.commit()


def cart_contents(db, user):
    db.expire_all()
    items = db.query(CartItemModel).filter(CartItemModel.cart_id == user.cart.id).all()
    return {i.product_id: i.quantity for i in items}


def make_order(
    db,
    payment_intent_id="pi_123",
    user=None,
    product_ids=(),
    status=OrderStatus.PAYMENT_INITIATED,
    total="39.98",
):
    order = OrderModel(
        user_id=user.id if user else None,
        stripe_payment_intent_id=payment_intent_id,
        status=status.value,
        total_price=Decimal(total),
        items=[OrderItemModel(product_id=pid, quantity=1) for pid in product_ids],
        shipping_address=ShippingAddressModel(
            full_name="Ada Lovelace",
            line1="1 Analytical Way",
            city="Toronto",
            province="ON",
            postal_code="M5V 2T6",
            country="CA",
        ),
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    return order
