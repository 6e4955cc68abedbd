"""Driver interface exports."""
from .base import Driver, DriverManager, driver_manager
from .static import StaticDriver, register_static_driver

__all__ = [
    "Driver",
    "DriverManager",
    "StaticDriver",
    "driver_manager",
    "register_static_driver",
]
