"""Client-side state containers used by the UI"""
