from nicegui import ui

from home_sandbox.components.device_panel import DevicePanel
from home_sandbox.constants.device_templates import COLOR_OPTIONS


def color_for(color_name: str) -> str:
    option = next((c for c in COLOR_OPTIONS if c['name'] == color_name), None)
    return option['color'] if option else '#FFFFFF'


class LightPanel(DevicePanel):
    '''Power, brightness and color controls for a light'''

    icon = 'lightbulb'

    def build_visual(self):
        with ui.row().classes('w-full justify-center py-6'):
            self.glow = ui.element('div').classes('w-[180px] h-[180px] rounded-full transition-all duration-300')

    def build_controls(self):
        self.power_switch = ui.switch('Power', on_change=lambda e: self.change(power=e.value))
        ui.label('Color Temperature').classes('text-sm text-white/70')
        self.color_buttons = {}
        with ui.row().classes('w-full gap-2'):
            for option in COLOR_OPTIONS:
                button = ui.button(on_click=lambda _, name=option['name']: self.change(colorTemp=name))
                button.classes('flex-1 h-10 rounded-xl').style(f'background-color: {option["color"]} !important')
                button.tooltip(option['label'])
                self.color_buttons[option['name']] = button
        with ui.row().classes('w-full justify-between'):
            ui.label('Brightness').classes('text-sm text-white/70')
            self.brightness_label = ui.label().classes('text-sm font-semibold')
        self.brightness_slider = ui.slider(min=0, max=100, step=1,
                                           on_change=lambda e: self.change(brightness=int(e.value)))

    def sync(self):
        settings = self.settings
        power = bool(settings.get('power', False))
        brightness = int(settings.get('brightness', 100))
        color = color_for(settings.get('colorTemp'))
        opacity = brightness / 100 if power else 0.05

        self.glow.style(
            f'background: radial-gradient(circle, {color} 0%, rgba(255,255,255,0.5) 50%, transparent 100%);'
            f'opacity: {opacity}; box-shadow: 0 0 60px {color};'
        )
        self.power_switch.value = power
        self.brightness_slider.value = brightness
        self.brightness_label.text = f'{brightness}%'
        for name, button in self.color_buttons.items():
            if name == settings.get('colorTemp'):
                button.classes(add='ring-2 ring-sky-400 scale-105')
            else:
                button.classes(remove='ring-2 ring-sky-400 scale-105')
