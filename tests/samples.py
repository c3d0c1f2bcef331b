"""Sample payloads shared by the test modules"""

LAMP = {"type": "light", "name": "Lamp", "settings": {"power": True, "brightness": 80, "colorTemp": "cool"}}
DESK_FAN = {"type": "fan", "name": "Desk Fan", "settings": {"power": True, "speed": 30}}


def placed(device, x=200, y=150):
    return {**device, "position_x": x, "position_y": y}
