from .company import CompanyIn, CompanyOut
from .station import StationIn, StationOut
from .common import DeletedResponse

__all__ = ["CompanyIn", "CompanyOut", "StationIn", "StationOut", "DeletedResponse"]
