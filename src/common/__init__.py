"""
common

This package contains shared models used across the consent decoder and the consent API.

Modules:
    - models: Defines the Pydantic models for a decoded consent string
"""

from .models import BitFieldVendors, EncodingMode, ParsedConsent, RangeEntry, RangeVendors

__all__ = ["BitFieldVendors", "EncodingMode", "ParsedConsent", "RangeEntry", "RangeVendors"]
