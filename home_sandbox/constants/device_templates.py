"""Device templates offered in the sidebar and their default settings"""

LIGHT = 'light'
FAN = 'fan'

DEVICE_TEMPLATES = {
    LIGHT: {
        "label": "Light",
        "section": "Light Control Panel",
        "icon": "lightbulb",
        "default_settings": {
            "power": False,
            "brightness": 100,
            "colorTemp": "warm",
        },
    },
    FAN: {
        "label": "Fan",
        "section": "Controls for Fan",
        "icon": "mode_fan",
        "default_settings": {
            "power": False,
            "speed": 0,
        },
    },
}

# Selectable light colors, in display order
COLOR_OPTIONS = [
    {"name": "warm", "color": "#FFD700", "label": "Warm"},
    {"name": "neutral", "color": "#FFFFFF", "label": "Neutral"},
    {"name": "cool", "color": "#B0E0E6", "label": "Cool"},
    {"name": "pink", "color": "#FFB6C1", "label": "Pink"},
    {"name": "blue", "color": "#87CEEB", "label": "Blue"},
    {"name": "purple", "color": "#DDA0DD", "label": "Purple"},
]

# Offset between devices created from one preset on a multi-device canvas
TEMPLATE_SPACING = 40


def default_settings(device_type: str) -> dict:
    """Fresh copy of the default settings for a device type"""
    template = DEVICE_TEMPLATES.get(device_type)
    return dict(template["default_settings"]) if template else {}


def default_name(device_type: str) -> str:
    return f"{device_type.capitalize()} Device"
