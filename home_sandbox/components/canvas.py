from typing import Dict
from nicegui import ui
from loguru import logger

from home_sandbox.client.cancellation import CancellationToken
from home_sandbox.client.devices_store import DEVICE_UPDATED, DEVICES_CHANGED, DevicesStore
from home_sandbox.client.drop_controller import DropController
from home_sandbox.components.device_panel import DevicePanel
from home_sandbox.components.drag_state import DragState
from home_sandbox.components.fan_panel import FanPanel
from home_sandbox.components.light_panel import LightPanel

PANELS = {
    'light': LightPanel,
    'fan': FanPanel,
}


class Canvas:
    '''Drop target rendering one control panel per device'''

    def __init__(self, devices: DevicesStore, controller: DropController, drag: DragState, token: CancellationToken):
        self.devices = devices
        self.controller = controller
        self.drag = drag
        self.token = token
        self.panels: Dict[int, DevicePanel] = {}
        self.devices.events.on(DEVICES_CHANGED, lambda _: self.device_view.refresh())
        self.devices.events.on(DEVICE_UPDATED, self._sync_panel)

    def build(self):
        with ui.column().classes('flex-1 h-screen overflow-y-auto p-5 bg-slate-950 text-white') as self.area:
            self.area.on('dragover.prevent', lambda: self.area.classes(add='border-2 border-dashed border-sky-400'))
            self.area.on('dragleave', self._unhighlight)
            self.area.on('drop', self.handle_drop, ['clientX', 'clientY'])
            with ui.row().classes('w-full justify-between items-center pb-4 mb-8 border-b border-white/10'):
                ui.label('Sandbox').classes('text-2xl font-semibold')
                self.count_badge = ui.label().classes('text-sm text-white/60 bg-slate-800 px-4 py-2 rounded-full')
            self.device_view()

    def _unhighlight(self):
        self.area.classes(remove='border-2 border-dashed border-sky-400')

    @ui.refreshable
    def device_view(self):
        devices = self.devices.devices
        count = len(devices)
        self.count_badge.text = f"{count} device{'s' if count != 1 else ''} active"
        self.panels = {}
        if not devices:
            with ui.column().classes('w-full items-center justify-center gap-5 min-h-[400px] text-white/30'):
                ui.label('+').classes('text-6xl w-[120px] h-[120px] rounded-full border-4 border-dashed '
                                      'border-white/20 flex items-center justify-center')
                ui.label('Drag and drop devices here to start')
            return
        with ui.row().classes('w-full gap-5 justify-center'):
            for device in devices:
                panel_class = PANELS.get(device['type'])
                if panel_class is None:
                    logger.warning(f"No panel for device type {device['type']}")
                    continue
                panel = panel_class(device, self.devices, self.token)
                panel.build()
                self.panels[device['id']] = panel

    def _sync_panel(self, device_id):
        panel = self.panels.get(device_id)
        if panel is not None and panel.device is not None:
            panel.sync()

    async def handle_drop(self, e):
        self._unhighlight()
        item = self.drag.take()
        if item is None:
            return
        args = e.args or {}
        position = None
        if args.get('clientX') is not None and args.get('clientY') is not None:
            position = (int(args['clientX']), int(args['clientY']))

        if item['kind'] == 'device':
            await self.controller.drop_device(item['device_type'], position, self.token)
        elif item['kind'] == 'preset':
            await self.controller.drop_preset(item['preset_id'], position, self.token)
