from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")
RATE_PRECISION = Decimal("0.0001")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """None cuenta como cero; floats pasan por str para no arrastrar binario."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    """Redondeo comercial: mitad hacia arriba, 2 decimales."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def rate_fraction(percentage) -> Decimal:
    """15.00 -> 0.1500 (4 decimales, mitad hacia arriba)."""
    return (to_decimal(percentage) / Decimal(100)).quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)
