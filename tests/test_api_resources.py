"""API tests for users, catalog and orders."""

from app.data.models import CartModel, OrderModel, OrderStatus
from factories import make_category, make_order, make_product, make_user


class TestUsers:
    def test_create_user_with_cart(self, client, db):
        response = client.post(
            "/users/",
            json={"email": "grace@hopper.io", "firstName": "Grace", "lastName": "Hopper"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "user"
        assert body["cartId"] is not None
        assert db.query(CartModel).filter(CartModel.user_id == body["id"]).count() == 1

    def test_duplicate_email(self, client, db):
        make_user(db, email="grace@hopper.io")

        response = client.post(
            "/users/",
            json={"email": "grace@hopper.io", "firstName": "G", "lastName": "H"},
        )

        assert response.status_code == 400

    def test_update_and_delete(self, client, db):
        user = make_user(db)
        order = make_order(db, user=user)

        updated = client.patch(f"/users/{user.id}", json={"firstName": "Augusta"})
        assert updated.status_code == 200
        assert updated.json()["firstName"] == "Augusta"

        deleted = client.delete(f"/users/{user.id}")
        assert deleted.status_code == 204
        assert client.get(f"/users/{user.id}").status_code == 404

        db.expire_all()
        assert db.query(CartModel).count() == 0
        assert db.get(OrderModel, order.id).user_id is None


class TestCatalog:
    def test_product_crud(self, client, db):
        category = make_category(db)

        created = client.post(
            "/products/",
            json={"name": "Mouse", "price": "49.50", "stock": 3, "categoryId": category.id},
        )
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert created.json()["category"] == {"id": category.id, "name": category.name}

        patched = client.patch(f"/products/{product_id}", json={"stock": 7})
        assert patched.json()["stock"] == 7
        assert patched.json()["name"] == "Mouse"

        assert len(client.get("/products/").json()) == 1
        assert client.delete(f"/products/{product_id}").status_code == 204
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_product_with_unknown_category(self, client):
        response = client.post("/products/", json={"name": "Mouse", "price": "1.00", "categoryId": 9})

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}

    def test_category_crud(self, client):
        created = client.post("/categories/", json={"name": "Audio"})
        assert created.status_code == 201
        category_id = created.json()["id"]

        assert client.post("/categories/", json={"name": "Audio"}).status_code == 400

        renamed = client.patch(f"/categories/{category_id}", json={"name": "Sound"})
        assert renamed.json() == {"id": category_id, "name": "Sound"}

        assert client.delete(f"/categories/{category_id}").status_code == 204
        assert client.get("/categories/").json() == []


class TestOrders:
    def test_get_order(self, client, db):
        user = make_user(db)
        product = make_product(db)
        order = make_order(db, user=user, product_ids=(product.id,))

        response = client.get(f"/orders/{order.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["stripePaymentIntentId"] == "pi_123"
        assert body["status"] == OrderStatus.PAYMENT_INITIATED.value
        assert body["items"] == [{"productId": product.id, "productQuantity": 1}]
        assert body["shippingAddress"]["postalCode"] == "M5V 2T6"

    def test_list_and_items(self, client, db):
        make_order(db, payment_intent_id="pi_1", product_ids=(1, 2))
        order = make_order(db, payment_intent_id="pi_2", product_ids=(3,))

        assert len(client.get("/orders/").json()) == 2
        assert client.get(f"/orders/{order.id}/items").json() == [
            {"productId": 3, "productQuantity": 1}
        ]

    def test_delete_order(self, client, db):
        order = make_order(db, product_ids=(1,))

        assert client.delete(f"/orders/{order.id}").status_code == 204
        assert client.get(f"/orders/{order.id}").status_code == 404

    def test_missing_order(self, client):
        response = client.get("/orders/404")

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
