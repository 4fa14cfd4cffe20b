"""Pure helper functions shared by the gateway and resolver stages."""
from typing import Tuple

ZIPCODE_LENGTH = 8
_DIGITS = frozenset("0123456789")


def validate_zipcode(cep) -> bool:
    """Check the structural shape of a CEP.

    A CEP is valid iff it is a string of exactly 8 ASCII digits. Leading
    zeros are allowed; hyphens, spaces and non-ASCII digits are not.

    Args:
        cep: Raw value taken from the request

    Returns:
        bool: True if the value is a well-formed CEP
    """
    if not isinstance(cep, str) or len(cep) != ZIPCODE_LENGTH:
        return False
    return all(ch in _DIGITS for ch in cep)


def convert_temperature(temp_c: float) -> Tuple[float, float]:
    """Convert a Celsius temperature to (Fahrenheit, Kelvin)."""
    return temp_c * 1.8 + 32, temp_c + 273


__all__ = ["ZIPCODE_LENGTH", "validate_zipcode", "convert_temperature"]
