"""Client-side mirror of the preset table.

Unlike device settings, preset changes are never applied optimistically:
the local list only changes once the server has confirmed the mutation.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional
from loguru import logger

from home_sandbox.client.api_client import ApiError, SandboxApiClient
from home_sandbox.client.cancellation import CancellationToken, is_cancelled
from home_sandbox.client.devices_store import Notify, log_notification
from home_sandbox.constants.device_templates import default_name
from home_sandbox.utils.event_system import EventSystem

PRESETS_CHANGED = 'presets_changed'


def to_template(device: Dict[str, Any]) -> Dict[str, Any]:
    """Strip a canvas device down to a position-free preset template"""
    return {
        'type': device['type'],
        'name': device.get('name') or default_name(device['type']),
        'settings': dict(device.get('settings') or {}),
    }


class PresetsStore:
    """Holds ``presets``, ``loading`` and ``error`` for the sidebar"""

    def __init__(self, api: SandboxApiClient, events: Optional[EventSystem] = None,
                 notify: Optional[Notify] = None):
        self.api = api
        self.events = events or EventSystem()
        self.notify = notify or log_notification
        self.presets: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def find(self, preset_id) -> Optional[Dict[str, Any]]:
        return next((p for p in self.presets if p['id'] == preset_id), None)

    @asynccontextmanager
    async def _pending(self):
        self._in_flight += 1
        self.error = None
        try:
            yield
        finally:
            self._in_flight -= 1

    def _reject(self, message: str, e: ApiError, token: Optional[CancellationToken]) -> ApiError:
        logger.warning(f"{message}: {e}")
        if not is_cancelled(token):
            self.error = str(e)
            self.notify(message, type='negative')
        return e

    async def fetch_presets(self, token: Optional[CancellationToken] = None) -> List[Dict[str, Any]]:
        """Replace the local list with the server's; a failed fetch keeps the old list"""
        async with self._pending():
            try:
                records = await self.api.get_all_presets()
            except ApiError as e:
                raise self._reject('Failed to fetch presets', e, token)
        if is_cancelled(token):
            return self.presets

        self.presets = list(records) if isinstance(records, list) else []
        logger.debug(f"Fetched {len(self.presets)} presets")
        await self.events.emit(PRESETS_CHANGED, self.presets)
        return self.presets

    async def save_preset(self, name: str, devices: Iterable[Dict[str, Any]], description: Optional[str] = None,
                          token: Optional[CancellationToken] = None) -> Optional[Dict[str, Any]]:
        """Save the given canvas devices as a new preset, then refetch the list"""
        name = (name or '').strip()
        templates = [to_template(device) for device in devices]
        if not name:
            raise ValueError('Please enter a preset name')
        if not templates:
            raise ValueError('No devices to save')

        payload = {'name': name, 'devices': templates}
        if description:
            payload['description'] = description

        async with self._pending():
            try:
                record = await self.api.create_preset(payload)
            except ApiError as e:
                raise self._reject('Failed to save preset', e, token)
        if is_cancelled(token):
            return None

        self.presets.append(record)
        logger.info(f"Saved preset {record['id']} '{record['name']}'")
        await self.events.emit(PRESETS_CHANGED, self.presets)

        try:
            await self.fetch_presets(token)
        except ApiError:
            logger.warning("Preset saved but the list could not be refreshed")
        return record

    async def delete_preset(self, preset_id, token: Optional[CancellationToken] = None) -> bool:
        async with self._pending():
            try:
                await self.api.delete_preset(preset_id)
            except ApiError as e:
                raise self._reject('Failed to delete preset', e, token)
        if is_cancelled(token):
            return False

        self.presets = [p for p in self.presets if p['id'] != preset_id]
        await self.events.emit(PRESETS_CHANGED, self.presets)
        return True
