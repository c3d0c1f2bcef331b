"""Tests for the /api/presets endpoints."""

from tests.samples import DESK_FAN, LAMP


def _preset(client, devices=None, **fields):
    payload = {"name": "Evening", "devices": devices if devices is not None else [LAMP], **fields}
    return client.post("/api/presets", json=payload)


class TestPresetCreate:

    def test_create_returns_snapshot(self, client):
        resp = _preset(client, description="Warm light for reading")
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Preset created successfully"
        assert body["data"]["name"] == "Evening"
        assert body["data"]["description"] == "Warm light for reading"
        assert body["data"]["devices"] == [LAMP]

    def test_description_is_optional(self, client):
        resp = _preset(client)
        assert resp.status_code == 201
        assert resp.json()["data"]["description"] is None

    def test_templates_drop_position_and_ids(self, client):
        device = {**LAMP, "id": 7, "position_x": 10, "position": {"x": 10, "y": 20}}
        resp = _preset(client, devices=[device])
        assert resp.json()["data"]["devices"] == [LAMP]

    def test_list_presets(self, client):
        _preset(client)
        _preset(client, name="Morning", devices=[DESK_FAN])

        names = [p["name"] for p in client.get("/api/presets").json()["data"]]
        assert names == ["Evening", "Morning"]


class TestPresetValidation:

    def test_name_and_devices_are_required(self, client):
        resp = client.post("/api/presets", json={})
        assert resp.status_code == 422
        assert {"name", "devices"} <= set(resp.json()["errors"])

    def test_devices_must_not_be_empty(self, client):
        resp = _preset(client, devices=[])
        assert resp.status_code == 422
        assert "devices" in resp.json()["errors"]

    def test_each_template_is_validated(self, client):
        broken = [LAMP, {"type": "heater", "name": "Heater", "settings": {}}, {"type": "fan", "name": "Fan"}]
        resp = _preset(client, devices=broken)
        assert resp.status_code == 422
        errors = resp.json()["errors"]
        assert "devices.1.type" in errors
        assert "devices.2.settings" in errors
        assert client.get("/api/presets").json()["data"] == []

    def test_template_name_must_be_a_string(self, client):
        resp = _preset(client, devices=[{**LAMP, "name": 42}])
        assert resp.status_code == 422
        assert "devices.0.name" in resp.json()["errors"]

    def test_template_name_is_capped_like_device_names(self, client):
        resp = _preset(client, devices=[{**LAMP, "name": "x" * 256}])
        assert resp.status_code == 422
        assert "devices.0.name" in resp.json()["errors"]
        assert _preset(client, devices=[{**LAMP, "name": "x" * 255}]).status_code == 201


class TestPresetUpdate:

    def test_name_only_update_keeps_devices(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"name": "Late evening"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["name"] == "Late evening"
        assert data["devices"] == [LAMP]

    def test_devices_are_validated_when_present(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"devices": [{"type": "heater"}]})
        assert resp.status_code == 422
        assert "devices.0.type" in resp.json()["errors"]

    def test_replacement_devices_must_be_complete_templates(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"devices": [{"name": "Only name"}]})
        assert resp.status_code == 422
        errors = resp.json()["errors"]
        assert "devices.0.type" in errors
        assert "devices.0.settings" in errors
        assert client.get(f"/api/presets/{preset['id']}").json()["data"]["devices"] == [LAMP]

    def test_replacement_template_name_is_capped(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"devices": [{**LAMP, "name": "x" * 300}]})
        assert resp.status_code == 422
        assert "devices.0.name" in resp.json()["errors"]

    def test_devices_replace_the_snapshot(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"devices": [DESK_FAN, LAMP]})
        assert resp.json()["data"]["devices"] == [DESK_FAN, LAMP]

    def test_explicit_null_devices_is_rejected(self, client):
        preset = _preset(client).json()["data"]

        resp = client.put(f"/api/presets/{preset['id']}", json={"devices": None})
        assert resp.status_code == 422


class TestPresetLoad:

    def test_load_returns_stored_template_unchanged(self, client):
        preset = _preset(client, devices=[
            {"type": "light", "name": "Lamp", "settings": {"brightness": 80, "colorTemp": "cool"}}
        ]).json()["data"]

        resp = client.get(f"/api/presets/{preset['id']}/load")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Preset loaded successfully"
        assert resp.json()["data"]["devices"] == [
            {"type": "light", "name": "Lamp", "settings": {"brightness": 80, "colorTemp": "cool"}}
        ]

    def test_snapshot_is_independent_of_live_devices(self, client):
        device = client.post("/api/devices", json=LAMP).json()["data"]
        preset = _preset(client, devices=[device]).json()["data"]

        client.put(f"/api/devices/{device['id']}", json={"name": "Renamed", "settings": {"brightness": 1}})
        client.delete("/api/devices")

        data = client.get(f"/api/presets/{preset['id']}/load").json()["data"]
        assert data["devices"] == [LAMP]

    def test_load_does_not_touch_devices(self, client):
        client.post("/api/devices", json=DESK_FAN)
        preset = _preset(client).json()["data"]

        client.get(f"/api/presets/{preset['id']}/load")
        assert [d["name"] for d in client.get("/api/devices").json()["data"]] == ["Desk Fan"]


class TestPresetNotFound:

    def test_unknown_id(self, client):
        assert client.get("/api/presets/42").status_code == 404
        assert client.put("/api/presets/42", json={"name": "x"}).status_code == 404
        assert client.delete("/api/presets/42").status_code == 404
        resp = client.get("/api/presets/42/load")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Preset not found"

    def test_malformed_id_is_not_found(self, client):
        resp = client.get("/api/presets/abc/load")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Preset not found"
        assert client.delete("/api/presets/abc").status_code == 404


class TestPresetDelete:

    def test_delete(self, client):
        preset = _preset(client).json()["data"]

        resp = client.delete(f"/api/presets/{preset['id']}")
        assert resp.status_code == 200
        assert client.get("/api/presets").json()["data"] == []
