"""API tests for user cart endpoints."""

from factories import cart_contents, make_product, make_user, put_in_cart


class TestGetCart:
    def test_returns_items(self, client, db):
        user = make_user(db)
        product = make_product(db)
        put_in_cart(db, user, product.id, 2)

        response = client.get(f"/users/{user.id}/cart")

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == user.id
        assert body["items"] == [{"productId": product.id, "productQuantity": 2}]

    def test_unknown_user(self, client):
        response = client.get("/users/99/cart")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestSyncCart:
    def test_reconciles_cart(self, client, db):
        user = make_user(db)
        a, b, c = (make_product(db, name=n) for n in ("A", "B", "C"))
        put_in_cart(db, user, a.id, 2)
        put_in_cart(db, user, b.id, 1)

        response = client.put(
            f"/users/{user.id}/cart",
            json=[
                {"productId": a.id, "productQuantity": 0},
                {"productId": c.id, "productQuantity": 3},
            ],
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "cart updated successfully",
            "created": 1,
            "updated": 0,
            "deleted": 1,
        }
        assert cart_contents(db, user) == {b.id: 1, c.id: 3}

    def test_negative_quantity_is_422(self, client, db):
        user = make_user(db)

        response = client.put(
            f"/users/{user.id}/cart",
            json=[{"productId": 1, "productQuantity": -2}],
        )

        assert response.status_code == 422

    def test_unknown_product(self, client, db):
        user = make_user(db)

        response = client.put(
            f"/users/{user.id}/cart",
            json=[{"productId": 123, "productQuantity": 1}],
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Product 123 not found"}


class TestCartItems:
    def test_add_and_remove(self, client, db):
        user = make_user(db)
        product = make_product(db)

        added = client.post(
            f"/users/{user.id}/cart/items",
            json={"productId": product.id, "productQuantity": 2},
        )
        assert added.status_code == 200
        assert added.json()["items"] == [{"productId": product.id, "productQuantity": 2}]

        duplicate = client.post(
            f"/users/{user.id}/cart/items",
            json={"productId": product.id, "productQuantity": 1},
        )
        assert duplicate.status_code == 400

        removed = client.delete(f"/users/{user.id}/cart/items/{product.id}")
        assert removed.status_code == 200
        assert removed.json()["items"] == []

    def test_remove_missing_item(self, client, db):
        user = make_user(db)

        response = client.delete(f"/users/{user.id}/cart/items/5")

        assert response.status_code == 404

    def test_clear(self, client, db):
        user = make_user(db)
        product = make_product(db)
        put_in_cart(db, user, product.id, 4)

        response = client.delete(f"/users/{user.id}/cart")

        assert response.status_code == 200
        assert response.json() == {"message": "Cart cleared successfully"}
        assert cart_contents(db, user) == {}
