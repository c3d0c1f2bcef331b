"""Tests for canvas drops: single and multi device modes, stale presets, rollback."""

from unittest.mock import AsyncMock

import pytest

from home_sandbox.client.api_client import ApiError
from home_sandbox.client.devices_store import DevicesStore
from home_sandbox.client.drop_controller import DropController
from tests.samples import DESK_FAN, LAMP

TWO_DEVICE_PRESET = {"name": "Living room", "devices": [LAMP, DESK_FAN]}


def controller(devices_store, presets_store, notifications, mode):
    return DropController(devices_store, presets_store, mode=mode, notify=notifications)


def server_devices(client):
    return client.get("/api/devices").json()["data"]


def fail_creates(devices_store, failing_calls):
    """Make the given (1-based) create calls fail, delegating the rest"""
    real = devices_store.api.create_device
    calls = {"count": 0}

    async def create(payload):
        calls["count"] += 1
        if calls["count"] in failing_calls:
            raise ApiError("Error creating device", 500)
        return await real(payload)

    devices_store.api.create_device = create


class TestSingleDeviceCanvas:

    @pytest.mark.asyncio
    async def test_fan_drop_on_empty_canvas(self, client, devices_store, presets_store, notifications):
        drop = controller(devices_store, presets_store, notifications, "single")

        created = await drop.drop_device("fan", (320, 240))

        assert len(created) == 1
        rows = server_devices(client)
        assert len(rows) == 1
        assert rows[0]["type"] == "fan"
        assert rows[0]["name"] == "Fan Device"
        assert rows[0]["settings"] == {"power": False, "speed": 0}
        assert (rows[0]["position_x"], rows[0]["position_y"]) == (320, 240)

    @pytest.mark.asyncio
    async def test_device_drop_replaces_existing_device(self, client, devices_store, presets_store, notifications):
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")

        await drop.drop_device("light")

        rows = server_devices(client)
        assert [r["type"] for r in rows] == ["light"]
        assert rows[0]["settings"] == {"power": False, "brightness": 100, "colorTemp": "warm"}
        assert (rows[0]["position_x"], rows[0]["position_y"]) == (100, 100)
        assert [d["type"] for d in devices_store.devices] == ["light"]

    @pytest.mark.asyncio
    async def test_preset_drop_creates_first_template_only(self, client, devices_store, presets_store,
                                                           notifications):
        preset = client.post("/api/presets", json=TWO_DEVICE_PRESET).json()["data"]
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")

        created = await drop.drop_preset(preset["id"], (50, 60))

        assert len(created) == 1
        rows = server_devices(client)
        assert len(rows) == 1
        assert rows[0]["name"] == "Lamp"
        assert rows[0]["settings"] == LAMP["settings"]

    @pytest.mark.asyncio
    async def test_drop_clears_rows_hidden_by_single_canvas(self, client, api, events, presets_store,
                                                            notifications):
        client.post("/api/devices", json=LAMP)
        client.post("/api/devices", json=DESK_FAN)
        store = DevicesStore(api, events, notify=notifications, single_device=True)
        await store.fetch_devices()

        await controller(store, presets_store, notifications, "single").drop_device("fan")

        rows = server_devices(client)
        assert [(r["type"], r["name"]) for r in rows] == [("fan", "Fan Device")]

    @pytest.mark.asyncio
    async def test_unknown_device_type(self, client, devices_store, presets_store, notifications):
        drop = controller(devices_store, presets_store, notifications, "single")

        assert await drop.drop_device("heater") is None
        assert server_devices(client) == []
        assert notifications.of_type("warning") == ["Unknown device type: heater"]


class TestMultiDeviceCanvas:

    @pytest.mark.asyncio
    async def test_device_drops_accumulate(self, client, devices_store, presets_store, notifications):
        drop = controller(devices_store, presets_store, notifications, "multi")

        await drop.drop_device("fan")
        await drop.drop_device("light")

        assert [r["type"] for r in server_devices(client)] == ["fan", "light"]

    @pytest.mark.asyncio
    async def test_preset_drop_creates_every_template_in_order(self, client, devices_store, presets_store,
                                                               notifications):
        preset = client.post("/api/presets", json=TWO_DEVICE_PRESET).json()["data"]
        drop = controller(devices_store, presets_store, notifications, "multi")
        await drop.drop_device("fan")

        await drop.drop_preset(preset["id"], (200, 200))

        rows = server_devices(client)
        assert [r["name"] for r in rows] == ["Lamp", "Desk Fan"]
        assert [(r["position_x"], r["position_y"]) for r in rows] == [(200, 200), (240, 240)]


class TestPresetResolution:

    @pytest.mark.asyncio
    async def test_uses_fresh_preset_not_cached_copy(self, client, devices_store, presets_store, notifications):
        preset = client.post("/api/presets", json={"name": "Evening", "devices": [LAMP]}).json()["data"]
        await presets_store.fetch_presets()

        # Edited elsewhere after the sidebar rendered it
        dimmed = {**LAMP, "settings": {**LAMP["settings"], "brightness": 5}}
        client.put(f"/api/presets/{preset['id']}", json={"devices": [dimmed]})

        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_preset(preset["id"])

        assert server_devices(client)[0]["settings"]["brightness"] == 5

    @pytest.mark.asyncio
    async def test_deleted_preset_changes_nothing(self, client, devices_store, presets_store, notifications):
        preset = client.post("/api/presets", json={"name": "Evening", "devices": [LAMP]}).json()["data"]
        await presets_store.fetch_presets()
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")

        client.delete(f"/api/presets/{preset['id']}")
        assert await drop.drop_preset(preset["id"]) is None

        assert [r["type"] for r in server_devices(client)] == ["fan"]
        assert notifications.of_type("warning") == ["This preset no longer exists"]


class TestStoredTemplates:

    @pytest.mark.asyncio
    async def test_incomplete_templates_are_skipped(self, client, devices_store, presets_store, notifications):
        presets_store.api.get_all_presets = AsyncMock(return_value=[
            {"id": 7, "name": "Legacy", "devices": [{"name": "Only name"}, "lamp", LAMP]},
        ])
        drop = controller(devices_store, presets_store, notifications, "single")

        created = await drop.drop_preset(7)

        assert [d["name"] for d in created] == ["Lamp"]
        assert [r["name"] for r in server_devices(client)] == ["Lamp"]

    @pytest.mark.asyncio
    async def test_preset_without_usable_templates_changes_nothing(self, client, devices_store, presets_store,
                                                                   notifications):
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")
        presets_store.api.get_all_presets = AsyncMock(return_value=[
            {"id": 7, "name": "Legacy", "devices": [{"name": "Only name"}, {"type": "heater", "settings": {}}]},
        ])

        assert await drop.drop_preset(7) is None
        assert [r["type"] for r in server_devices(client)] == ["fan"]
        assert notifications.of_type("warning") == ["This preset has no usable devices"]


class TestRollback:

    @pytest.mark.asyncio
    async def test_failed_create_restores_previous_device(self, client, devices_store, presets_store,
                                                          notifications):
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")
        devices_store.update_device_local(devices_store.devices[0]["id"], {"speed": 55})
        await devices_store.update_device_async(devices_store.devices[0]["id"])
        fail_creates(devices_store, {1})

        assert await drop.drop_device("light") is None

        rows = server_devices(client)
        assert len(rows) == 1
        assert rows[0]["type"] == "fan"
        assert rows[0]["settings"] == {"power": False, "speed": 55}
        assert [d["type"] for d in devices_store.devices] == ["fan"]
        assert "Failed to create device. Please try again." in notifications.of_type("negative")

    @pytest.mark.asyncio
    async def test_partial_preset_load_is_undone(self, client, devices_store, presets_store, notifications):
        preset = client.post("/api/presets", json=TWO_DEVICE_PRESET).json()["data"]
        drop = controller(devices_store, presets_store, notifications, "multi")
        await drop.drop_device("light")
        fail_creates(devices_store, {2})

        assert await drop.drop_preset(preset["id"]) is None

        rows = server_devices(client)
        assert [(r["type"], r["name"]) for r in rows] == [("light", "Light Device")]
        assert "Failed to load preset. Please try again." in notifications.of_type("negative")

    @pytest.mark.asyncio
    async def test_failed_clear_creates_nothing(self, client, devices_store, presets_store, notifications):
        drop = controller(devices_store, presets_store, notifications, "single")
        await drop.drop_device("fan")

        async def broken():
            raise ApiError("Error deleting devices", 500)

        devices_store.api.delete_all_devices = broken
        assert await drop.drop_device("light") is None
        assert [r["type"] for r in server_devices(client)] == ["fan"]


class TestModes:

    def test_unknown_mode_is_rejected(self, devices_store, presets_store):
        with pytest.raises(ValueError):
            DropController(devices_store, presets_store, mode="grid")
