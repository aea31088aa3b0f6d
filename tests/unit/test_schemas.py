import pytest
from pydantic import ValidationError

from reviews_api.schemas.records import (
    ProductCreate,
    ReviewCreate,
    SoftwareReviewCreate,
    UserCreate,
    coerce_in_stock,
)


class TestInStock:
    @pytest.mark.parametrize("value", ["true", "TRUE", " yes ", "1", True, 1])
    def test_truthy_spellings(self, value):
        assert coerce_in_stock(value) is True

    @pytest.mark.parametrize("value", ["false", "no", "0", "", "maybe", False])
    def test_everything_else_is_false(self, value):
        assert coerce_in_stock(value) is False

    def test_missing_defaults_to_true(self):
        assert ProductCreate(name="Laptop").in_stock is True
        assert ProductCreate.model_validate({"name": "Laptop", "inStock": None}).in_stock is True

    def test_wire_name_is_accepted(self):
        assert ProductCreate.model_validate({"name": "Laptop", "inStock": "No"}).in_stock is False


class TestSoftwareReviewCreate:
    def test_csv_strings_are_coerced(self):
        review = SoftwareReviewCreate.model_validate({
            "rating": "4",
            "timestamp": "1588615855070",
            "helpful_vote": "0",
            "verified_purchase": "true",
            "images": "",
        })
        assert review.rating == 4.0
        assert review.timestamp == 1588615855070
        assert review.helpful_vote == 0
        assert review.verified_purchase is True
        assert review.images == []

    def test_blank_cells_are_absent(self):
        review = SoftwareReviewCreate.model_validate({"rating": "", "verified_purchase": " "})
        assert review.rating is None
        assert review.verified_purchase is None

    def test_scalar_image_is_wrapped(self):
        assert SoftwareReviewCreate(images="https://img/1.jpg").images == ["https://img/1.jpg"]
        assert SoftwareReviewCreate(images=["a", "b"]).images == ["a", "b"]

    def test_unknown_columns_are_dropped(self):
        review = SoftwareReviewCreate.model_validate({"title": "Ok", "color": "red"})
        assert "color" not in review.to_model_kwargs()

    def test_non_numeric_rating_is_rejected(self):
        with pytest.raises(ValidationError):
            SoftwareReviewCreate.model_validate({"rating": "five"})


class TestFlexibleSchemas:
    def test_extra_fields_are_kept(self):
        user = UserCreate.model_validate({"name": "Ana", "age": "31", "prefs": {"dark": True}})
        kwargs = user.to_model_kwargs()
        assert kwargs["name"] == "Ana"
        assert kwargs["extras"] == {"age": "31", "prefs": {"dark": True}}
        assert "id" not in kwargs

    def test_supplied_id_is_used(self):
        kwargs = UserCreate.model_validate({"_id": "u-1", "name": "Ana"}).to_model_kwargs()
        assert kwargs["id"] == "u-1"

    def test_numeric_id_becomes_text(self):
        assert UserCreate.model_validate({"_id": 42, "name": "Ana"}).id == "42"

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            UserCreate.model_validate({"email": "ana@example.com"})
        with pytest.raises(ValidationError):
            ProductCreate.model_validate({"name": ""})

    def test_review_references_use_wire_names(self):
        review = ReviewCreate.model_validate({"userId": "u-1", "productId": "", "comment": "Fine"})
        kwargs = review.to_model_kwargs()
        assert kwargs["user_id"] == "u-1"
        assert kwargs["product_id"] is None
        assert kwargs["extras"] == {}
