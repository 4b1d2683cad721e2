from porest_core.schemas.response import ApiResponse, DisplayTypeItem

__all__ = ["ApiResponse", "DisplayTypeItem"]
