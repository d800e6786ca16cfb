# cafe_pos/shared/services/pricing_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from pydantic import BaseModel

CENT = Decimal("0.01")
PREMIUM_DISCOUNT_RATE = Decimal("0.20")
SERVICE_CHARGE_RATE = Decimal("0.10")


class PriceBreakdown(BaseModel):
    subtotal: Decimal
    discount: Decimal
    service_charge: Decimal
    total: Decimal


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    return to_cents(Decimal(unit_price) * quantity)


def calculate_totals(lines: Iterable[Tuple[Decimal, int]], tier: str) -> PriceBreakdown:
    """
    Calcular subtotal, descuento, propina (cargo por servicio) y total.

    - 20% de descuento solo para clientes premium
    - 10% de cargo por servicio sobre el subtotal con descuento, para todos

    Cada monto se redondea al centavo antes de usarse en el paso siguiente,
    así total == (subtotal - descuento) * 1.10 exacto al centavo.
    """
    subtotal = sum((line_subtotal(price, qty) for price, qty in lines), Decimal("0.00"))
    subtotal = to_cents(subtotal)

    discount = to_cents(subtotal * PREMIUM_DISCOUNT_RATE) if tier == "premium" else Decimal("0.00")
    discounted = subtotal - discount

    service_charge = to_cents(discounted * SERVICE_CHARGE_RATE)
    total = discounted + service_charge

    return PriceBreakdown(
        subtotal=subtotal,
        discount=discount,
        service_charge=service_charge,
        total=total
    )
