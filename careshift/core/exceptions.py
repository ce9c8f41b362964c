from fastapi import HTTPException, status

class BaseAppException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationError(BaseAppException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)

class ParseError(ValidationError):
    """Malformed time-of-day, weekday name or schedule text."""
    def __init__(self, detail: str = "Could not parse value"):
        super().__init__(detail=detail)

class NotFoundError(BaseAppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class ConflictError(BaseAppException):
    def __init__(self, detail: str = "Operation conflicts with current state"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class StorageError(BaseAppException):
    def __init__(self, detail: str = "Storage is temporarily unavailable, please try again"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
