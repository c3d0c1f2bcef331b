from nicegui import ui
from loguru import logger

from home_sandbox import config
from home_sandbox.client.api_client import ApiError, SandboxApiClient
from home_sandbox.client.cancellation import CancellationToken
from home_sandbox.client.devices_store import DevicesStore
from home_sandbox.client.drop_controller import DropController
from home_sandbox.client.presets_store import PresetsStore
from home_sandbox.components.canvas import Canvas
from home_sandbox.components.drag_state import DragState
from home_sandbox.components.fan_panel import SPIN_CSS
from home_sandbox.components.sidebar import Sidebar
from home_sandbox.utils.event_system import EventSystem


class SandboxPage:
    '''Sidebar plus canvas for one browser client'''

    def __init__(self, api: SandboxApiClient, canvas_mode: str = None):
        self.api = api
        self.events = EventSystem()
        self.token = CancellationToken(owner='sandbox page')
        mode = canvas_mode or config.CANVAS_MODE
        self.devices = DevicesStore(self.api, self.events, notify=ui.notify, single_device=mode == 'single')
        self.presets = PresetsStore(self.api, self.events, notify=ui.notify)
        self.controller = DropController(self.devices, self.presets, mode=mode, notify=ui.notify)
        self.drag = DragState()

    def build(self):
        '''Creates the page layout and schedules the initial fetch'''
        ui.add_head_html(SPIN_CSS)
        ui.query('body').classes('bg-slate-950')
        with ui.row().classes('w-full h-screen no-wrap gap-0'):
            Sidebar(self.devices, self.presets, self.drag, self.token).build()
            Canvas(self.devices, self.controller, self.drag, self.token).build()

        ui.context.client.on_disconnect(self.token.cancel)
        ui.timer(0.1, self.load, once=True)
        logger.info(f"Sandbox page built (canvas mode: {self.controller.mode})")

    async def load(self):
        '''Mirror the server state on mount'''
        for action in (self.presets.fetch_presets, self.devices.fetch_devices):
            try:
                await action(self.token)
            except ApiError as e:
                logger.debug(f"Initial load step failed: {e}")
