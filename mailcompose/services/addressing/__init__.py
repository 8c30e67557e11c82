"""Address validation services."""

from .address_validator import AddressValidator

__all__ = ["AddressValidator"]
