from typing import Any, Dict, Optional
from nicegui import ui
from loguru import logger

from home_sandbox.client.api_client import ApiError
from home_sandbox.client.cancellation import CancellationToken
from home_sandbox.client.devices_store import DevicesStore


class DevicePanel:
    '''Base control panel for one device on the canvas'''

    icon = 'devices'

    def __init__(self, device: Dict[str, Any], store: DevicesStore, token: Optional[CancellationToken] = None):
        self.device_id = device['id']
        self.store = store
        self.token = token

    @property
    def device(self) -> Optional[Dict[str, Any]]:
        return self.store.find(self.device_id)

    @property
    def settings(self) -> Dict[str, Any]:
        device = self.device
        return device['settings'] if device else {}

    def build(self):
        '''Sets up the card holding the device visual and its controls'''
        with ui.card().classes('w-full max-w-[480px] p-6 gap-4 bg-slate-800 text-white rounded-2xl'):
            with ui.row().classes('w-full justify-between items-center'):
                with ui.row().classes('items-center gap-2'):
                    ui.icon(self.icon).classes('text-2xl text-sky-400')
                    ui.label(self.device['name']).classes('text-lg font-semibold')
                ui.button(icon='delete', on_click=self.delete).props('flat round').classes('text-red-400')
            self.build_visual()
            self.build_controls()
        self.sync()

    def build_visual(self):
        raise NotImplementedError

    def build_controls(self):
        raise NotImplementedError

    def sync(self):
        '''Refresh visual and controls from the store'''
        raise NotImplementedError

    async def change(self, **changes):
        '''Apply a settings change locally, then persist it'''
        changes = {k: v for k, v in changes.items() if self.settings.get(k) != v}
        if not changes or self.device is None:
            return
        self.store.update_device_local(self.device_id, changes)
        self.sync()
        try:
            await self.store.update_device_async(self.device_id, self.token)
        except ApiError as e:
            # Store already rolled back and notified
            logger.debug(f"Settings change on device {self.device_id} not persisted: {e}")
            self.sync()

    async def delete(self):
        try:
            await self.store.delete_device(self.device_id, self.token)
            ui.notify('Device removed', type='positive')
        except ApiError as e:
            logger.debug(f"Device {self.device_id} not deleted: {e}")
