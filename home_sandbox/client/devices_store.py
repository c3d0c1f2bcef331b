"""Client-side mirror of the device table.

Settings changes are applied locally first (``update_device_local``) so the
controls react instantly, then persisted (``update_device_async``). Every
local edit bumps a per-field generation counter. When a persist call comes
back, only fields without a newer local edit take the server's value; when it
fails, those same fields fall back to the last value the server confirmed.
"""

from contextlib import asynccontextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, List, Optional
from loguru import logger

from home_sandbox.client.api_client import ApiError, SandboxApiClient
from home_sandbox.client.cancellation import CancellationToken, is_cancelled
from home_sandbox.config import DEFAULT_POSITION
from home_sandbox.utils.event_system import EventSystem

Notify = Callable[..., Any]

DEVICES_CHANGED = 'devices_changed'
DEVICE_UPDATED = 'device_updated'


def log_notification(message: str, type: str = 'info'):
    logger.info(f"[{type}] {message}")


def to_local(record: Dict[str, Any]) -> Dict[str, Any]:
    """Map a server record onto the shape the canvas renders"""
    x = record.get('position_x')
    y = record.get('position_y')
    return {
        'id': record['id'],
        'type': record['type'],
        'name': record.get('name'),
        'position': {
            'x': DEFAULT_POSITION[0] if x is None else x,
            'y': DEFAULT_POSITION[1] if y is None else y,
        },
        'settings': dict(record.get('settings') or {}),
    }


def to_payload(device: Dict[str, Any]) -> Dict[str, Any]:
    """Full device shape sent back to the API"""
    return {
        'type': device['type'],
        'name': device['name'],
        'settings': dict(device['settings']),
        'position_x': device['position']['x'],
        'position_y': device['position']['y'],
    }


class DevicesStore:
    """Holds ``devices``, ``loading`` and ``error`` for the canvas"""

    def __init__(self, api: SandboxApiClient, events: Optional[EventSystem] = None,
                 notify: Optional[Notify] = None, single_device: bool = False):
        self.api = api
        self.events = events or EventSystem()
        self.notify = notify or log_notification
        # A single-device canvas only ever shows the first row
        self.single_device = single_device
        self.devices: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self._in_flight = 0
        # Per device: last server-confirmed settings and the generations they reflect
        self._confirmed: Dict[Any, Dict[str, Any]] = {}
        self._confirmed_generations: Dict[Any, Dict[str, int]] = {}
        # Per device: generation of the latest local edit of each settings field
        self._generations: Dict[Any, Dict[str, int]] = {}

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def find(self, device_id) -> Optional[Dict[str, Any]]:
        return next((d for d in self.devices if d['id'] == device_id), None)

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

    def _track(self, device: Dict[str, Any]):
        device_id = device['id']
        self._confirmed[device_id] = deepcopy(device['settings'])
        self._confirmed_generations[device_id] = {}
        self._generations[device_id] = {}

    def _forget(self, device_id):
        for table in (self._confirmed, self._confirmed_generations, self._generations):
            table.pop(device_id, None)

    async def fetch_devices(self, token: Optional[CancellationToken] = None) -> List[Dict[str, Any]]:
        """Replace the local list with the server's"""
        async with self._pending():
            try:
                records = await self.api.get_all_devices()
            except ApiError as e:
                raise self._reject('Failed to fetch devices', e, token)
        if is_cancelled(token):
            return self.devices

        self.devices = [to_local(record) for record in records]
        if self.single_device and len(self.devices) > 1:
            logger.warning(f"Single-device canvas: showing 1 of {len(self.devices)} stored devices")
            self.devices = self.devices[:1]
        self._confirmed, self._confirmed_generations, self._generations = {}, {}, {}
        for device in self.devices:
            self._track(device)
        logger.debug(f"Fetched {len(self.devices)} devices")
        await self.events.emit(DEVICES_CHANGED, self.devices)
        return self.devices

    async def create_device(self, payload: Dict[str, Any],
                            token: Optional[CancellationToken] = None) -> Optional[Dict[str, Any]]:
        async with self._pending():
            try:
                record = await self.api.create_device(payload)
            except ApiError as e:
                raise self._reject('Failed to create device', e, token)
        if is_cancelled(token):
            return None

        device = to_local(record)
        self.devices.append(device)
        self._track(device)
        logger.info(f"Device {device['id']} ({device['type']}) added to canvas")
        await self.events.emit(DEVICES_CHANGED, self.devices)
        return device

    def update_device_local(self, device_id, partial_settings: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Optimistically merge settings into the in-memory device"""
        device = self.find(device_id)
        if device is None:
            logger.warning(f"Ignoring local update for unknown device {device_id}")
            return None

        generations = self._generations.setdefault(device_id, {})
        for field, value in partial_settings.items():
            device['settings'][field] = value
            generations[field] = generations.get(field, 0) + 1
        return device

    async def update_device_async(self, device_id,
                                  token: Optional[CancellationToken] = None) -> Optional[Dict[str, Any]]:
        """Persist the device's current local shape and reconcile the response"""
        device = self.find(device_id)
        if device is None:
            logger.warning(f"Cannot persist unknown device {device_id}")
            return None

        sent_generations = dict(self._generations.get(device_id, {}))
        async with self._pending():
            try:
                record = await self.api.update_device(device_id, to_payload(device))
            except ApiError as e:
                if not is_cancelled(token):
                    self._rollback(device_id, sent_generations)
                    await self.events.emit(DEVICE_UPDATED, device_id)
                raise self._reject('Failed to update device', e, token)
        if is_cancelled(token):
            return None

        self._confirm(device_id, record.get('settings') or {}, sent_generations)
        updated = self._reconcile(device_id, record, sent_generations)
        await self.events.emit(DEVICE_UPDATED, device_id)
        return updated

    def _confirm(self, device_id, server_settings: Dict[str, Any], sent_generations: Dict[str, int]):
        confirmed = self._confirmed.setdefault(device_id, {})
        confirmed_generations = self._confirmed_generations.setdefault(device_id, {})
        for field, value in server_settings.items():
            generation = sent_generations.get(field, 0)
            # An older response arriving late must not overwrite a newer confirmation
            if generation >= confirmed_generations.get(field, 0):
                confirmed[field] = deepcopy(value)
                confirmed_generations[field] = generation

    def _reconcile(self, device_id, record: Dict[str, Any], sent_generations: Dict[str, int]):
        device = self.find(device_id)
        if device is None:
            return None

        generations = self._generations.get(device_id, {})
        settings = dict(record.get('settings') or {})
        for field, value in device['settings'].items():
            if generations.get(field, 0) > sent_generations.get(field, 0):
                settings[field] = value

        fresh = to_local(record)
        device.update(type=fresh['type'], name=fresh['name'], position=fresh['position'], settings=settings)
        return device

    def _rollback(self, device_id, sent_generations: Dict[str, int]):
        """Restore unconfirmed fields that have no newer local edit"""
        device = self.find(device_id)
        if device is None:
            return

        generations = self._generations.get(device_id, {})
        confirmed = self._confirmed.get(device_id, {})
        confirmed_generations = self._confirmed_generations.get(device_id, {})
        for field, generation in sent_generations.items():
            if generations.get(field, 0) != generation:
                continue
            if generation <= confirmed_generations.get(field, 0):
                continue
            if field in confirmed:
                device['settings'][field] = deepcopy(confirmed[field])
            else:
                device['settings'].pop(field, None)
            logger.info(f"Rolled back '{field}' on device {device_id}")

    async def delete_device(self, device_id, token: Optional[CancellationToken] = None) -> bool:
        async with self._pending():
            try:
                await self.api.delete_device(device_id)
            except ApiError as e:
                raise self._reject('Failed to delete device', e, token)
        if is_cancelled(token):
            return False

        self.devices = [d for d in self.devices if d['id'] != device_id]
        self._forget(device_id)
        await self.events.emit(DEVICES_CHANGED, self.devices)
        return True

    async def delete_all_devices(self, token: Optional[CancellationToken] = None) -> bool:
        async with self._pending():
            try:
                await self.api.delete_all_devices()
            except ApiError as e:
                raise self._reject('Failed to delete all devices', e, token)
        if is_cancelled(token):
            return False

        self.devices = []
        self._confirmed, self._confirmed_generations, self._generations = {}, {}, {}
        await self.events.emit(DEVICES_CHANGED, self.devices)
        return True
