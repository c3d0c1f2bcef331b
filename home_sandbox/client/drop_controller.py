"""Turns canvas drops into device API calls.

A drop runs as a small saga: optionally clear the canvas, then create the new
device(s). If a create fails, the devices created by this drop are deleted
again and the ones that were on the canvas before are recreated, so the user
sees either the old canvas or the new one.
"""

from typing import Any, Dict, List, Optional, Tuple
from loguru import logger

from home_sandbox import config
from home_sandbox.client.api_client import ApiError
from home_sandbox.client.cancellation import CancellationToken, is_cancelled
from home_sandbox.client.devices_store import DevicesStore, Notify, log_notification, to_payload
from home_sandbox.client.presets_store import PresetsStore
from home_sandbox.constants.device_templates import (
    DEVICE_TEMPLATES, TEMPLATE_SPACING, default_name, default_settings
)

Position = Tuple[int, int]


def is_template(template) -> bool:
    """A stored preset element that can be turned into a device"""
    return (isinstance(template, dict)
            and template.get('type') in DEVICE_TEMPLATES
            and isinstance(template.get('settings') or {}, dict))


class DropController:
    """Accepts device-template and preset drops onto the canvas"""

    def __init__(self, devices: DevicesStore, presets: PresetsStore,
                 mode: Optional[str] = None, notify: Optional[Notify] = None):
        self.devices = devices
        self.presets = presets
        self.mode = mode or config.CANVAS_MODE
        if self.mode not in config.CANVAS_MODES:
            raise ValueError(f"Unknown canvas mode: {self.mode}")
        self.notify = notify or log_notification

    @property
    def single_device(self) -> bool:
        return self.mode == 'single'

    @staticmethod
    def _position(position: Optional[Position], offset: int = 0) -> Position:
        x, y = position if position else config.DEFAULT_POSITION
        return int(x) + offset, int(y) + offset

    async def drop_device(self, device_type: str, position: Optional[Position] = None,
                          token: Optional[CancellationToken] = None) -> Optional[List[Dict[str, Any]]]:
        """Create a device of ``device_type`` with default settings at the drop point"""
        if device_type not in DEVICE_TEMPLATES:
            logger.warning(f"Rejected drop of unknown device type '{device_type}'")
            self.notify(f"Unknown device type: {device_type}", type='warning')
            return None

        x, y = self._position(position)
        payload = {
            'type': device_type,
            'name': default_name(device_type),
            'settings': default_settings(device_type),
            'position_x': x,
            'position_y': y,
        }
        clear = self.single_device and bool(self.devices.devices)
        return await self._run([payload], clear, token, 'Failed to create device. Please try again.')

    async def drop_preset(self, preset_id, position: Optional[Position] = None,
                          token: Optional[CancellationToken] = None) -> Optional[List[Dict[str, Any]]]:
        """Replace the canvas with the preset's devices.

        The preset is looked up again by id after refreshing the list, never
        taken from what was captured when the drag started.
        """
        try:
            await self.presets.fetch_presets(token)
        except ApiError:
            logger.warning(f"Resolving preset {preset_id} from the cached list")
        if is_cancelled(token):
            return None

        preset = self.presets.find(preset_id)
        if preset is None or not preset.get('devices'):
            logger.warning(f"Preset {preset_id} is gone or empty, nothing to load")
            self.notify('This preset no longer exists', type='warning')
            return None

        templates = [t for t in preset['devices'] if is_template(t)]
        skipped = len(preset['devices']) - len(templates)
        if skipped:
            logger.warning(f"Preset {preset_id}: skipped {skipped} malformed templates")
        if not templates:
            self.notify('This preset has no usable devices', type='warning')
            return None
        if self.single_device:
            templates = templates[:1]

        payloads = []
        for index, template in enumerate(templates):
            x, y = self._position(position, index * TEMPLATE_SPACING)
            payloads.append({
                'type': template['type'],
                'name': template.get('name') or default_name(template['type']),
                'settings': dict(template.get('settings') or {}),
                'position_x': x,
                'position_y': y,
            })
        logger.info(f"Loading preset {preset_id} '{preset['name']}' ({len(payloads)} devices)")
        return await self._run(payloads, True, token, 'Failed to load preset. Please try again.')

    async def _run(self, payloads: List[Dict[str, Any]], clear: bool,
                   token: Optional[CancellationToken], failure_message: str) -> Optional[List[Dict[str, Any]]]:
        previous = [to_payload(device) for device in self.devices.devices] if clear else []
        created: List[Dict[str, Any]] = []
        cleared = False
        try:
            if clear:
                await self.devices.delete_all_devices(token)
                cleared = True
            for payload in payloads:
                if is_cancelled(token):
                    logger.debug("Drop abandoned, its component is gone")
                    return None
                device = await self.devices.create_device(payload, token)
                if device is not None:
                    created.append(device)
        except ApiError as e:
            logger.error(f"Drop failed after {len(created)} of {len(payloads)} devices: {e}")
            await self._compensate(created, previous if cleared else [])
            self.notify(failure_message, type='negative')
            return None
        return created

    async def _compensate(self, created: List[Dict[str, Any]], previous: List[Dict[str, Any]]):
        """Undo a partial drop; every step is attempted even if an earlier one fails"""
        for device in created:
            try:
                await self.devices.delete_device(device['id'])
            except ApiError as e:
                logger.error(f"Could not remove device {device['id']} during rollback: {e}")
        for payload in previous:
            try:
                await self.devices.create_device(payload)
            except ApiError as e:
                logger.error(f"Could not restore device '{payload['name']}' during rollback: {e}")
        if previous:
            logger.info(f"Restored {len(previous)} previous devices after failed drop")
