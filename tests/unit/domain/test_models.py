from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from checkout_service.domain.models import Card, OrderLineItem, mask_card_number


class TestMaskCardNumber:
    def test_none_stays_none(self) -> None:
        assert mask_card_number(None) is None

    @pytest.mark.parametrize("value", ["", "1", "12", "123", "1234"])
    def test_short_numbers_are_returned_unchanged(self, value: str) -> None:
        assert mask_card_number(value) == value

    def test_sixteen_digit_number(self) -> None:
        assert mask_card_number("4532015112830366") == "************0366"

    def test_five_characters(self) -> None:
        assert mask_card_number("12345") == "************2345"

    def test_longer_than_sixteen_is_still_sixteen(self) -> None:
        masked = mask_card_number("4532015112830366123")
        assert masked == "************6123"
        assert len(masked) == 16

    @pytest.mark.parametrize("value", ["12345", "4532015112830366", "abcdefghijklmnopqrstuvwxyz"])
    def test_masked_shape(self, value: str) -> None:
        masked = mask_card_number(value)
        assert len(masked) == 16
        assert masked.startswith("*" * 12)
        assert masked.endswith(value[-4:])


class TestOrderLineItem:
    def test_total_is_price_times_quantity(self) -> None:
        item = OrderLineItem.priced(
            id="i-1", product_id="p-1", product_name="Mouse", quantity=3, price_per_unit=Decimal("19.99")
        )
        assert item.total_price == Decimal("59.97")

    def test_price_is_rounded_to_cents(self) -> None:
        item = OrderLineItem.priced(
            id="i-1", product_id="p-1", product_name="Mouse", quantity=3, price_per_unit=Decimal("0.335")
        )
        assert item.price_per_unit == Decimal("0.34")
        assert item.total_price == Decimal("1.02")
        assert item.total_price.as_tuple().exponent == -2

    def test_zero_and_negative_quantities_are_not_rejected(self) -> None:
        zero = OrderLineItem.priced(
            id="i-1", product_id="p-1", product_name="Mouse", quantity=0, price_per_unit=Decimal("5.00")
        )
        negative = OrderLineItem.priced(
            id="i-2", product_id="p-1", product_name="Mouse", quantity=-2, price_per_unit=Decimal("5.00")
        )
        assert zero.total_price == Decimal("0")
        assert negative.total_price == Decimal("-10.00")


class TestCard:
    @pytest.fixture
    def card(self) -> Card:
        return Card(
            id="c-1",
            user_id="u-1",
            cardholder_name="John Doe",
            card_number="4532015112830366",
            expiration_date=date(2026, 3, 10),
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

    def test_new_card_is_active_and_not_default(self, card: Card) -> None:
        assert card.is_active()
        assert card.is_default is False

    def test_deleted_card_is_not_active(self, card: Card) -> None:
        deleted = card.model_copy(update={"deleted_at": datetime(2026, 2, 1, tzinfo=timezone.utc)})
        assert not deleted.is_active()

    def test_expiry_is_strictly_before_today(self, card: Card) -> None:
        assert not card.is_expired(date(2026, 3, 10))
        assert card.is_expired(date(2026, 3, 10) + timedelta(days=1))
        assert not card.is_expired(date(2026, 3, 9))

    def test_masked_view_hides_number(self, card: Card) -> None:
        view = card.masked()
        assert view.masked_card_number == "************0366"
        assert "card_number" not in view.model_dump()
        assert view.id == card.id
        assert view.user_id == card.user_id
