"""Smart home sandbox: simulated lights and fans on a drag-and-drop canvas"""

__version__ = "0.1.0"
