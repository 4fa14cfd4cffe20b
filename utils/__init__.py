"""Utility functions for the CEP weather services"""

from .helpers import ZIPCODE_LENGTH, validate_zipcode, convert_temperature

__all__ = ["ZIPCODE_LENGTH", "validate_zipcode", "convert_temperature"]
