"""Integration tests for users, products, reviews, /data and critical reviews."""

import pytest


@pytest.fixture()
def shop(seed_catalog):
    seed_catalog(
        users=[{"id": "u-1", "name": "Ana", "email": "ana@example.com"}],
        products=[{"id": "p-1", "name": "Laptop", "price": 999.0}],
        reviews=[
            {"id": "r-1", "user_id": "u-1", "product_id": "p-1", "rating": 4.0,
             "comment": "Good product, dar the battery dies fast"},
            {"id": "r-2", "user_id": "u-1", "product_id": "p-1", "rating": 5.0,
             "comment": "Excellent"},
            {"id": "r-3", "user_id": "ghost", "product_id": None, "rating": 2.0,
             "comment": "  DAR nu merge  "},
        ],
    )


class TestCreate:
    def test_create_user(self, client):
        response = client.post("/users", json={"name": "Ana", "email": "ana@example.com", "age": 31})
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Ana"
        assert body["age"] == 31
        assert body["_id"]
        assert client.get("/users").json() == [body]

    def test_create_product_defaults_in_stock(self, client):
        body = client.post("/products", json={"name": "Mouse", "price": 19.99}).json()
        assert body["inStock"] is True
        assert body["price"] == 19.99

    def test_create_product_parses_in_stock(self, client):
        assert client.post("/products", json={"name": "Pad", "inStock": "nope"}).json()["inStock"] is False

    def test_create_review(self, client):
        response = client.post("/reviews", json={"userId": "u-9", "productId": "p-9", "rating": 3, "comment": "Ok"})
        assert response.status_code == 201
        assert response.json()["userId"] == "u-9"

    def test_missing_required_field(self, client):
        response = client.post("/users", json={"email": "nobody@example.com"})
        assert response.status_code == 400
        assert "name" in response.json()["error"]

    def test_wrong_type(self, client):
        response = client.post("/products", json={"name": "Pad", "price": "cheap"})
        assert response.status_code == 400
        assert "price" in response.json()["error"]

    def test_body_must_be_json_object(self, client):
        assert client.post("/users", json=["Ana"]).status_code == 400
        response = client.post("/users", content=b"not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON."}

    def test_taken_id(self, client):
        client.post("/users", json={"_id": "u-1", "name": "Ana"})
        response = client.post("/users", json={"_id": "u-1", "name": "Bo"})
        assert response.status_code == 400
        assert "already exists" in response.json()["error"]


class TestJoinOnRead:
    def test_reviews_embed_referenced_records(self, client, shop):
        reviews = {r["_id"]: r for r in client.get("/reviews").json()}
        assert reviews["r-1"]["userId"]["name"] == "Ana"
        assert reviews["r-1"]["productId"]["name"] == "Laptop"
        assert reviews["r-3"]["userId"] is None
        assert reviews["r-3"]["productId"] is None

    def test_data_dump(self, client, shop):
        body = client.get("/data").json()
        assert [u["_id"] for u in body["users"]] == ["u-1"]
        assert [p["_id"] for p in body["products"]] == ["p-1"]
        assert len(body["reviews"]) == 3
        assert all(r["userId"] is None or r["userId"]["_id"] == "u-1" for r in body["reviews"])

    def test_data_dump_when_empty(self, client):
        assert client.get("/data").json() == {"users": [], "products": [], "reviews": []}


class TestCriticalReviews:
    def test_finds_comments_with_marker(self, client, shop):
        body = client.get("/analysis/critical-reviews").json()
        assert body["total"] == 2
        by_comment = {r["comment"]: r for r in body["reviews"]}
        assert by_comment["Good product, dar the battery dies fast"] == {
            "comment": "Good product, dar the battery dies fast",
            "user": "Ana",
            "product": "Laptop",
        }

    def test_unresolved_references_are_unknown_and_comment_is_trimmed(self, client, shop):
        reviews = client.get("/analysis/critical-reviews").json()["reviews"]
        [orphan] = [r for r in reviews if r["user"] == "Unknown"]
        assert orphan == {"comment": "DAR nu merge", "user": "Unknown", "product": "Unknown"}

    def test_no_matches(self, client):
        assert client.get("/analysis/critical-reviews").json() == {"total": 0, "reviews": []}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
