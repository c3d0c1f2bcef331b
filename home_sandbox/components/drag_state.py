from typing import Any, Dict, Optional


class DragState:
    '''What the user is currently dragging from the sidebar.

    Only identifiers are kept; the canvas resolves presets again on drop.
    '''

    def __init__(self):
        self.item: Optional[Dict[str, Any]] = None

    def start_device(self, device_type: str):
        self.item = {'kind': 'device', 'device_type': device_type}

    def start_preset(self, preset_id):
        self.item = {'kind': 'preset', 'preset_id': preset_id}

    def take(self) -> Optional[Dict[str, Any]]:
        item, self.item = self.item, None
        return item
