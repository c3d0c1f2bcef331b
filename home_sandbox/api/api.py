"""HTTP API for the smart home sandbox"""

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger

from home_sandbox.api import devices, presets, user
from home_sandbox.api.errors import NotFound, ValidationError, error_response

# Create API router
api_router = APIRouter(prefix="/api")
api_router.include_router(devices.router)
api_router.include_router(presets.router)
api_router.include_router(user.router)

# Resource segment of the URL -> message for ids that cannot exist
NOT_FOUND_MESSAGES = {
    "devices": "Device not found",
    "presets": "Preset not found",
}


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 422 and malformed ids as 404"""
    if any(error.get("loc", ())[:1] == ("path",) for error in exc.errors()):
        segments = request.url.path.strip("/").split("/")
        resource = segments[1] if len(segments) > 1 else ""
        logger.warning(f"Rejected {request.method} {request.url.path}: malformed id")
        return error_response(NotFound(NOT_FOUND_MESSAGES.get(resource, "Not found")))

    errors = {}
    for error in exc.errors():
        # Drop the leading 'body' marker from the location
        loc = error.get("loc", ())[1:] or error.get("loc", ())
        field = ".".join(str(part) for part in loc) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    logger.warning(f"Rejected {request.method} {request.url.path}: {errors}")
    return error_response(ValidationError(errors))


def register_api(app: FastAPI):
    """Mount the API routes and error handlers onto an existing FastAPI app"""
    app.include_router(api_router)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    logger.info("API endpoints set up at /api/*")


def create_app() -> FastAPI:
    """Standalone API application, used by tests and headless deployments"""
    app = FastAPI(title="Smart Home Sandbox API")
    register_api(app)
    return app
