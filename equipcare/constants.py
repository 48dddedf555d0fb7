"""Option lists offered by the contract forms"""

from .domain.scheduling.generator import CONTRACT_TYPES

EQUIPMENT_TYPES = ["Heated Dryer", "Refrigerant Dryer", "Compressor", "Vacuum Pump"]

BRANDS = [
    "Everair",
    "Beko",
    "Genesis",
    "Friulair",
    "Donaldson",
    "Hitachi",
    "Sullair",
    "Atlas Copco",
    "Kobelco",
    "Ingersoll Rand",
]

__all__ = ["BRANDS", "CONTRACT_TYPES", "EQUIPMENT_TYPES"]
