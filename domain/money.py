"""
Arithmétique décimale pour les heures et les montants
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from domain.exceptions import ValidationError

CENT = Decimal("0.01")


def to_decimal(value, field: str) -> Decimal:
    """Convertit une valeur numérique en Decimal sans passer par la représentation binaire"""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field, constraint="number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # 0.1 -> Decimal("0.1")
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field} must be a number", field=field, constraint="number")
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field, constraint="number")
    return result


def quantize_amount(amount: Decimal) -> Decimal:
    """Arrondit un montant au centime"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def check_scale(value: Decimal, field: str) -> Decimal:
    """Refuse plus de deux décimales (colonnes Numeric(..., 2))"""
    if value.normalize().as_tuple().exponent < -2:
        raise ValidationError(
            f"{field} cannot have more than 2 decimal places", field=field, constraint="scale <= 2"
        )
    return value
