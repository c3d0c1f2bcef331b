"""Error taxonomy shared by the services and the HTTP layer"""

from typing import Any, Dict, List, Optional
from fastapi.responses import JSONResponse


class SandboxError(Exception):
    """Base class for errors that map onto an API envelope"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationError(SandboxError):
    """Malformed or missing input fields"""
    status_code = 422

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation error"):
        super().__init__(message)
        self.errors = errors

    def to_envelope(self) -> Dict[str, Any]:
        return {**super().to_envelope(), "errors": self.errors}


class NotFound(SandboxError):
    """Unknown device or preset id"""
    status_code = 404

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.error = error

    def to_envelope(self) -> Dict[str, Any]:
        envelope = super().to_envelope()
        if self.error:
            envelope["error"] = self.error
        return envelope


class InternalError(SandboxError):
    """Any other persistence or runtime failure"""
    status_code = 500

    def __init__(self, message: str, error: str):
        super().__init__(message)
        self.error = error

    def to_envelope(self) -> Dict[str, Any]:
        return {**super().to_envelope(), "error": self.error}


def error_response(exc: SandboxError) -> JSONResponse:
    """Convert a sandbox error into the JSON envelope"""
    return JSONResponse(content=exc.to_envelope(), status_code=exc.status_code)
