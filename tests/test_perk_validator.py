"""
Perks API — Perk Validator Unit Tests
======================================

What:  Tests for the create and partial-update validation modes.
How:   Pure function tests; no database.

What we test:
    ✅ Defaults applied on create (description, category, discount, merchant)
    ✅ Title length, category enum and discount range enforced
    ✅ Booleans are not accepted as a discount
    ✅ Unknown fields rejected on create, dropped on update
    ✅ Update reports every error, not just the first
    ✅ Update returns only the supplied fields
"""

import pytest

from perks_api.exceptions import ValidationError
from perks_api.services.perk_validator import PerkValidator


class TestValidateCreate:
    """Tests for the create configuration."""

    def setup_method(self):
        self.validator = PerkValidator()

    def test_defaults_applied(self):
        """Only a title is required; everything else gets its default."""
        values = self.validator.validate_create({"title": "Gym pass"})

        assert values == {
            "title": "Gym pass",
            "description": "",
            "category": "other",
            "discount_percent": 0,
            "merchant": "",
        }

    def test_full_payload_normalized_to_attribute_names(self, sample_perk_data):
        values = self.validator.validate_create(sample_perk_data)

        assert values["discount_percent"] == 50
        assert values["category"] == "food"
        assert "discountPercent" not in values

    def test_snake_case_input_accepted(self):
        values = self.validator.validate_create({"title": "Gym pass", "discount_percent": 10})
        assert values["discount_percent"] == 10

    def test_numeric_string_discount_coerced(self):
        values = self.validator.validate_create({"title": "Gym pass", "discountPercent": "25"})
        assert values["discount_percent"] == 25.0

    def test_title_required(self):
        with pytest.raises(ValidationError, match="title"):
            self.validator.validate_create({"merchant": "Acme"})

    def test_title_too_short(self):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            self.validator.validate_create({"title": "A"})

    @pytest.mark.parametrize("discount", [-1, 100.5, 150])
    def test_discount_out_of_range(self, discount):
        with pytest.raises(ValidationError, match="discountPercent"):
            self.validator.validate_create({"title": "Gym pass", "discountPercent": discount})

    @pytest.mark.parametrize("discount", [0, 100])
    def test_discount_bounds_inclusive(self, discount):
        values = self.validator.validate_create({"title": "Gym pass", "discountPercent": discount})
        assert values["discount_percent"] == discount

    @pytest.mark.parametrize("flag", [True, False])
    def test_boolean_discount_rejected(self, flag):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_create({"title": "Gym pass", "discountPercent": flag})
        assert exc_info.value.message == "discountPercent: Input should be a valid number"

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="category"):
            self.validator.validate_create({"title": "Gym pass", "category": "luxury"})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            self.validator.validate_create({"title": "Gym pass", "color": "red"})

    def test_empty_description_allowed(self):
        values = self.validator.validate_create({"title": "Gym pass", "description": ""})
        assert values["description"] == ""

    def test_stops_at_first_error(self):
        """Create reports a single message even when several fields are wrong."""
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_create(
                {"title": "A", "category": "luxury", "discountPercent": 500}
            )
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.message == exc_info.value.errors[0]

    def test_non_object_body_rejected(self):
        with pytest.raises(ValidationError):
            self.validator.validate_create(["not", "an", "object"])

    def test_missing_body_rejected(self):
        with pytest.raises(ValidationError):
            self.validator.validate_create(None)


class TestValidateUpdate:
    """Tests for the partial-update configuration."""

    def setup_method(self):
        self.validator = PerkValidator()

    def test_only_supplied_fields_returned(self):
        """No defaults are filled in for fields the client did not send."""
        values = self.validator.validate_update({"description": "new"})
        assert values == {"description": "new"}

    def test_unknown_fields_stripped(self):
        values = self.validator.validate_update({"merchant": "Acme", "color": "red"})
        assert values == {"merchant": "Acme"}

    def test_only_unknown_fields_yields_empty(self):
        assert self.validator.validate_update({"color": "red"}) == {}

    def test_discount_range_checked(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_update({"discountPercent": 150})
        assert exc_info.value.message == "Validation failed"
        assert any("discountPercent" in e for e in exc_info.value.errors)

    @pytest.mark.parametrize("flag", [True, False])
    def test_boolean_discount_rejected(self, flag):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_update({"discountPercent": flag})
        assert exc_info.value.errors == ["discountPercent: Input should be a valid number"]

    def test_numeric_string_discount_coerced(self):
        assert self.validator.validate_update({"discountPercent": "40"}) == {"discount_percent": 40.0}

    def test_collects_all_errors(self):
        """Every invalid field is reported, not just the first."""
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_update(
                {"title": "A", "category": "luxury", "discountPercent": -5}
            )
        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any(e.startswith("title:") for e in errors)
        assert any(e.startswith("category:") for e in errors)
        assert any(e.startswith("discountPercent:") for e in errors)
        assert exc_info.value.context["errors"] == errors

    def test_explicit_null_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_update({"title": None})
        assert exc_info.value.errors == ["title: Field may not be null"]

    def test_category_normalized_to_plain_string(self):
        values = self.validator.validate_update({"category": "travel"})
        assert values == {"category": "travel"}
        assert type(values["category"]) is str
