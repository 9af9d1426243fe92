"""Unit tests for the trip charge calculator."""

from decimal import Decimal

import pytest

from transport_billing.calculators.trip_charge_calculator import (
    apply_raw_changes,
    calculate_trip_charges,
    format_fixed,
    format_plain,
    parse_amount,
    recompute,
)
from transport_billing.models.memo import DERIVED_FIELDS, TripMemo


@pytest.fixture
def discounted_memo() -> TripMemo:
    """Memo with 2.5 extra hours, 100 km at 2 and a 10% discount."""
    return TripMemo(
        memo_no="SVS-010",
        starting_time1="09:00",
        closing_time1="15:30",
        minimum_hours1="4",
        minimum_charges1="1000",
        additional_hour_rate="200",
        starting_km1="1000",
        closing_km1="1100",
        km_rate="2",
        discount_percentage="10",
        less_advance="500",
    )


class TestParseAmount:
    """Test lenient number parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1000", "1000"),
            ("1,250.50", "1250.50"),
            (" 12.5 ", "12.5"),
            ("", "0"),
            (None, "0"),
            ("abc", "0"),
            ("NaN", "0"),
            ("Infinity", "0"),
            (Decimal("3"), "3"),
        ],
    )
    def test_parse(self, value, expected):
        """Test malformed values count as 0 and never raise."""
        assert parse_amount(value) == Decimal(expected)


class TestCalculateTripCharges:
    """Test the charge breakdown of a memo."""

    def test_blank_memo_is_all_zero(self):
        """Test a blank memo computes to zero everywhere."""
        charges = calculate_trip_charges(TripMemo())

        assert charges.total_hours == Decimal("0.00")
        assert charges.driver_bata_qty == 0
        assert charges.total_amount == 0
        assert charges.amount_in_words == "Zero"

    def test_no_extra_hours_at_minimum(self):
        """Test hours equal to the minimum give no extra hours."""
        memo = TripMemo(
            starting_time1="09:00", closing_time1="13:00", minimum_hours1="4"
        )
        charges = calculate_trip_charges(memo)

        assert charges.total_hours == Decimal("4.00")
        assert charges.extra_hours == 0

    def test_extra_hours_beyond_minimum(self, discounted_memo):
        """Test 6.5 hours against a 4 hour minimum gives 2.5 extra hours."""
        charges = calculate_trip_charges(discounted_memo)

        assert charges.total_hours == Decimal("6.50")
        assert charges.extra_hours == Decimal("2.50")
        assert charges.additional_hour_amount == Decimal("500")

    def test_extra_hours_never_negative(self):
        """Test hours below both minimums give zero extra hours."""
        memo = TripMemo(
            starting_time1="09:00",
            closing_time1="10:00",
            minimum_hours1="4",
            minimum_hours2="2",
        )
        assert calculate_trip_charges(memo).extra_hours == 0

    def test_two_shifts_add_up(self):
        """Test both shifts count, including one crossing midnight."""
        memo = TripMemo(
            starting_time1="09:00",
            closing_time1="13:00",
            starting_time2="22:00",
            closing_time2="02:30",
        )
        charges = calculate_trip_charges(memo)

        assert charges.total_hours == Decimal("8.50")
        assert charges.driver_bata_qty == 9

    def test_discount_on_discountable_base_only(self, discounted_memo):
        """Test the discount ignores bata, toll, permit, night halt and other."""
        base = calculate_trip_charges(discounted_memo)
        loaded = calculate_trip_charges(
            discounted_memo.model_copy(
                update={
                    "driver_bata_rate": "25",
                    "toll_amount": "150",
                    "permit_amount": "300",
                    "night_halt_amount": "400",
                    "other_charges_amount": "50",
                }
            )
        )

        assert base.discountable_amount == Decimal("1700")
        assert base.discount_amount == Decimal("170")
        assert loaded.discount_amount == base.discount_amount

    def test_total_and_balance(self, discounted_memo):
        """Test total is subtotal less discount and balance deducts advance."""
        charges = calculate_trip_charges(discounted_memo)

        assert charges.subtotal == Decimal("1700")
        assert charges.total_amount == Decimal("1530")
        assert charges.balance == Decimal("1030")
        assert charges.amount_in_words == "One Thousand Five Hundred Thirty"

    def test_negative_kilometres_passed_through(self):
        """Test a closing reading below the start gives negative km."""
        memo = TripMemo(starting_km1="1050", closing_km1="1000", km_rate="10")
        charges = calculate_trip_charges(memo)

        assert charges.total_km == Decimal("-50")
        assert charges.km_amount == Decimal("-500")
        assert charges.amount_in_words == "Minus Five Hundred"

    def test_bad_numbers_count_as_zero(self):
        """Test non-numeric values are treated as 0."""
        memo = TripMemo(minimum_charges1="1000", toll_amount="abc")
        assert calculate_trip_charges(memo).total_amount == Decimal("1000")


class TestRecompute:
    """Test recompute and apply_raw_changes."""

    def test_renders_derived_fields(self, discounted_memo):
        """Test derived fields are rendered as memo text."""
        memo = recompute(discounted_memo)

        assert memo.total_hours == "6.50"
        assert memo.extra_hours == "2.50"
        assert memo.additional_hour_amount == "500"
        assert memo.total_km == "100"
        assert memo.km_amount == "200.00"
        assert memo.discount_amount == "170.00"
        assert memo.total_amount == "1530.00"
        assert memo.balance == "1030.00"

    def test_recompute_is_idempotent(self, discounted_memo):
        """Test recomputing an unchanged memo changes nothing."""
        once = recompute(discounted_memo)
        twice = recompute(once)

        assert {f: getattr(once, f) for f in DERIVED_FIELDS} == {
            f: getattr(twice, f) for f in DERIVED_FIELDS
        }

    def test_input_left_untouched(self, discounted_memo):
        """Test recompute returns a copy."""
        recompute(discounted_memo)
        assert discounted_memo.total_amount == "0.00"

    def test_apply_raw_changes_recomputes(self, discounted_memo):
        """Test an edit recomputes the whole derived set."""
        memo = apply_raw_changes(recompute(discounted_memo), discount_percentage="0")

        assert memo.discount_amount == "0.00"
        assert memo.total_amount == "1700.00"
        assert memo.balance == "1200.00"

    def test_derived_field_cannot_be_edited(self, discounted_memo):
        """Test derived fields are rejected as edits."""
        with pytest.raises(ValueError, match="derived"):
            apply_raw_changes(discounted_memo, total_amount="99")

    def test_unknown_field_rejected(self, discounted_memo):
        """Test unknown field names are rejected."""
        with pytest.raises(ValueError, match="Unknown memo field"):
            apply_raw_changes(discounted_memo, colour="blue")


class TestFormatting:
    """Test number rendering helpers."""

    def test_format_fixed(self):
        """Test fixed places with half-up rounding."""
        assert format_fixed(Decimal("170")) == "170.00"
        assert format_fixed(Decimal("499.5"), 0) == "500"
        assert format_fixed(Decimal("-0.001")) == "0.00"

    def test_format_plain(self):
        """Test plain rendering drops trailing zeros."""
        assert format_plain(Decimal("50.00")) == "50"
        assert format_plain(Decimal("12.50")) == "12.5"
        assert format_plain(Decimal("0.0")) == "0"
        assert format_plain(Decimal("1E+2")) == "100"
