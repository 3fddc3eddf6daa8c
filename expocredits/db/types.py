"""Column types for monetary values."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from expocredits.modules.common.money import from_minor_units, to_amount, to_minor_units


class MinorUnits(TypeDecorator):
    """Decimal amount stored as an integer count of minor units.

    ``Decimal("12.34")`` is persisted as ``1234`` so that balances never pass
    through binary floating point, whatever the backend.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_minor_units(to_amount(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return from_minor_units(int(value))

    @property
    def python_type(self):
        return Decimal
