from nicegui import ui
from loguru import logger

from home_sandbox.client.api_client import ApiError
from home_sandbox.client.cancellation import CancellationToken
from home_sandbox.client.devices_store import DevicesStore
from home_sandbox.client.presets_store import PRESETS_CHANGED, PresetsStore
from home_sandbox.components.drag_state import DragState
from home_sandbox.constants.device_templates import DEVICE_TEMPLATES


class Sidebar:
    '''Device library, saved presets and the save-preset form'''

    def __init__(self, devices: DevicesStore, presets: PresetsStore, drag: DragState, token: CancellationToken):
        self.devices = devices
        self.presets = presets
        self.drag = drag
        self.token = token
        self.presets.events.on(PRESETS_CHANGED, lambda _: self.preset_list.refresh())

    def build(self):
        with ui.column().classes('w-[280px] h-screen overflow-y-auto p-5 gap-6 bg-slate-900 text-white'):
            ui.label('Essential UI Element').classes('text-lg font-semibold')
            for device_type, template in DEVICE_TEMPLATES.items():
                with ui.column().classes('w-full gap-2'):
                    ui.label(template['section']).classes('text-xs uppercase tracking-wide text-white/60')
                    self._draggable_template(device_type, template)
            self._build_presets()

    def _draggable_template(self, device_type: str, template: dict):
        with ui.row().classes('w-full items-center gap-3 p-4 rounded-lg border-2 border-slate-700 '
                              'bg-slate-800 cursor-grab hover:border-sky-400') as item:
            ui.icon(template['icon']).classes('text-2xl text-sky-400')
            ui.label(template['label']).classes('text-sm font-medium')
        item.props('draggable')
        item.on('dragstart', lambda _, t=device_type: self.drag.start_device(t))

    def _build_presets(self):
        with ui.column().classes('w-full gap-3'):
            with ui.row().classes('w-full justify-between items-center'):
                ui.label('Saved Presets').classes('text-xs uppercase tracking-wide text-white/60')
                ui.button(icon='save', on_click=lambda: self.save_form.set_visibility(not self.save_form.visible)) \
                    .props('dense').tooltip('Save current configuration')

            with ui.card().classes('w-full p-4 gap-2 bg-slate-800') as self.save_form:
                self.name_input = ui.input(placeholder='Enter preset name...').classes('w-full')
                self.name_input.on('keydown.enter', self.save)
                with ui.row().classes('w-full gap-2'):
                    ui.button('Save', on_click=self.save).classes('flex-1')
                    ui.button('Cancel', on_click=self._close_form).props('outline').classes('flex-1')
            self.save_form.set_visibility(False)

            self.preset_list()

    @ui.refreshable
    def preset_list(self):
        if not self.presets.presets:
            ui.label('No saved presets').classes('w-full text-center py-5 text-white/40 text-sm')
            return
        for preset in self.presets.presets:
            with ui.row().classes('w-full items-center justify-between p-3 rounded-lg border-2 border-slate-700 '
                                  'bg-slate-800 cursor-grab hover:border-sky-400') as item:
                with ui.column().classes('gap-1'):
                    ui.label(preset['name']).classes('text-sm font-medium')
                    ui.label(f"{len(preset.get('devices') or [])} devices").classes('text-xs text-white/50')
                ui.button(icon='delete', on_click=lambda _, p=preset: self.confirm_delete(p)) \
                    .props('flat round dense').classes('text-red-400')
            item.props('draggable')
            item.on('dragstart', lambda _, pid=preset['id']: self.drag.start_preset(pid))

    def _close_form(self):
        self.name_input.value = ''
        self.save_form.set_visibility(False)

    async def save(self):
        try:
            await self.presets.save_preset(self.name_input.value, self.devices.devices, token=self.token)
        except ValueError as e:
            ui.notify(str(e), type='warning')
            return
        except ApiError as e:
            logger.debug(f"Preset not saved: {e}")
            return
        self._close_form()
        ui.notify('Preset saved successfully!', type='positive')

    def confirm_delete(self, preset: dict):
        with ui.dialog(value=True) as dialog, ui.card():
            ui.label(f"Delete preset '{preset['name']}'?")
            with ui.row():
                ui.button('Delete', on_click=lambda: self._delete(dialog, preset['id'])).props('color=negative')
                ui.button('Cancel', on_click=dialog.close).props('flat')

    async def _delete(self, dialog, preset_id):
        dialog.close()
        try:
            await self.presets.delete_preset(preset_id, self.token)
        except ApiError as e:
            logger.debug(f"Preset {preset_id} not deleted: {e}")
