"""Persistence operations behind the device and preset endpoints"""
