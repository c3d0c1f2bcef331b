"""Async HTTP wrapper around the sandbox REST API"""

from typing import Any, Dict, List, Optional
import httpx
from loguru import logger


class ApiError(Exception):
    """A rejected API call.

    ``status_code`` is ``None`` when the request never got a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[Dict[str, List[str]]] = None, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        self.error = error

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class SandboxApiClient:
    """Thin async client; every call returns the envelope's ``data``"""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
            headers={'Accept': 'application/json'},
        )

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(f"Network error: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get('message') or response.reason_phrase or 'Request failed'
            raise ApiError(message, response.status_code, body.get('errors'), body.get('error'))
        return body.get('data')

    # Devices

    async def get_all_devices(self) -> List[Dict[str, Any]]:
        return await self._request('GET', '/devices') or []

    async def create_device(self, device_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request('POST', '/devices', json=device_data)

    async def update_device(self, device_id: int, device_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request('PUT', f'/devices/{device_id}', json=device_data)

    async def delete_device(self, device_id: int):
        await self._request('DELETE', f'/devices/{device_id}')

    async def delete_all_devices(self):
        await self._request('DELETE', '/devices')

    # Presets

    async def get_all_presets(self) -> List[Dict[str, Any]]:
        return await self._request('GET', '/presets') or []

    async def create_preset(self, preset_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request('POST', '/presets', json=preset_data)

    async def delete_preset(self, preset_id: int):
        await self._request('DELETE', f'/presets/{preset_id}')

    async def aclose(self):
        await self._client.aclose()
