from nicegui import ui

from home_sandbox.components.device_panel import DevicePanel

# Seconds per revolution at full and minimum speed
FASTEST_SPIN = 0.3
SLOWEST_SPIN = 3.0

SPIN_CSS = '''
<style>
@keyframes sandbox-spin { from { transform: rotate(0deg); } to { transform: rotate(360deg); } }
</style>
'''


def spin_duration(speed: int, power: bool = True) -> float:
    '''Animation period for a fan speed; 0 means not spinning'''
    if not power or speed <= 0:
        return 0
    return SLOWEST_SPIN - (speed / 100) * (SLOWEST_SPIN - FASTEST_SPIN)


class FanPanel(DevicePanel):
    '''Power and speed controls for a fan'''

    icon = 'mode_fan'

    def build_visual(self):
        with ui.row().classes('w-full justify-center py-6'):
            self.blades = ui.icon('mode_fan').classes('text-[160px] text-sky-400')

    def build_controls(self):
        self.power_switch = ui.switch('Power', on_change=lambda e: self.change(power=e.value))
        with ui.row().classes('w-full justify-between'):
            ui.label('Speed').classes('text-sm text-white/70')
            self.speed_label = ui.label().classes('text-sm font-semibold')
        self.speed_slider = ui.slider(min=0, max=100, step=1,
                                      on_change=lambda e: self.change(speed=int(e.value)))

    def sync(self):
        settings = self.settings
        power = bool(settings.get('power', False))
        speed = int(settings.get('speed', 0))
        duration = spin_duration(speed, power)

        animation = f'sandbox-spin {duration:.2f}s linear infinite' if duration else 'none'
        self.blades.style(f'animation: {animation}')
        self.power_switch.value = power
        self.speed_slider.value = speed
        self.speed_label.text = f'{speed}%'
