"""EquipCare - service contract tracking and maintenance scheduling API"""

__version__ = "1.0.0"
