from fastapi.responses import JSONResponse
from loguru import logger
from home_sandbox.api.errors import InternalError, error_response


def success_response(data=None, message: str = None, status_code: int = 200) -> JSONResponse:
    """Wrap a result in the ``{success, message?, data?}`` envelope"""
    content = {"success": True}
    if message:
        content["message"] = message
    if data is not None:
        content["data"] = data
    return JSONResponse(content=content, status_code=status_code)


def unexpected_error(message: str, e: Exception) -> JSONResponse:
    """500 envelope for failures no service anticipated"""
    logger.exception(f"{message}: {e}")
    return error_response(InternalError(message, str(e)))
