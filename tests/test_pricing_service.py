from decimal import Decimal

from cafe_pos.shared.services.pricing_service import calculate_totals, line_subtotal, to_cents


def test_normal_customer_pays_service_charge_without_discount():
    totals = calculate_totals([(Decimal("3.00"), 2), (Decimal("5.00"), 1)], "normal")

    assert totals.subtotal == Decimal("11.00")
    assert totals.discount == Decimal("0.00")
    assert totals.service_charge == Decimal("1.10")
    assert totals.total == Decimal("12.10")


def test_premium_customer_gets_twenty_percent_off_before_service_charge():
    totals = calculate_totals([(Decimal("100.00"), 1)], "premium")

    assert totals.subtotal == Decimal("100.00")
    assert totals.discount == Decimal("20.00")
    assert totals.service_charge == Decimal("8.00")
    assert totals.total == Decimal("88.00")


def test_amounts_are_rounded_to_the_cent():
    totals = calculate_totals([(Decimal("10.05"), 1)], "premium")

    assert totals.discount == Decimal("2.01")
    assert totals.service_charge == Decimal("0.80")
    assert totals.total == Decimal("8.84")


def test_total_matches_discounted_subtotal_times_one_point_ten():
    for tier in ("normal", "premium"):
        for cents in range(0, 5000, 37):
            price = Decimal(cents) / 100
            totals = calculate_totals([(price, 3), (Decimal("0.99"), 1)], tier)

            expected_discount = to_cents(totals.subtotal * Decimal("0.20")) if tier == "premium" else Decimal("0")
            assert totals.discount == expected_discount
            assert totals.total == to_cents((totals.subtotal - totals.discount) * Decimal("1.10"))


def test_subtotal_is_exact_sum_of_line_subtotals():
    lines = [(Decimal("0.10"), 3), (Decimal("1.15"), 7), (Decimal("2.49"), 11)]
    totals = calculate_totals(lines, "normal")

    assert totals.subtotal == sum(line_subtotal(p, q) for p, q in lines)
    assert totals.subtotal == Decimal("35.74")


def test_empty_order_totals_zero():
    totals = calculate_totals([], "premium")

    assert totals.subtotal == Decimal("0.00")
    assert totals.total == Decimal("0.00")
