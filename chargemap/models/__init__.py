from .company import Company
from .station import Station

__all__ = ["Company", "Station"]
