"""Tests for the device and action registries."""

from registry import ActionRecord, DeviceRecord, DeviceRegistry, Registry


class TestRegistry:
    """Tests for Registry lookups."""

    def test_register_and_get(self):
        registry: Registry[ActionRecord] = Registry(name="action")
        record = registry.register(ActionRecord(id=7, name="Blink", path="led.blink"))

        assert registry.get("Blink") is record
        assert "Blink" in registry
        assert registry.get("Missing") is None
        assert list(registry.all()) == [record]

    def test_get_by_id(self, registries):
        assert registries["action"].get_by_id(2).name == "TurnOn"
        assert registries["action"].get_by_id(99) is None


class TestDeviceRegistry:
    """Tests for device to action resolution."""

    def test_actions_for_device_in_device_order(self, registries):
        actions = registries["device"].actions_for_device("Fan", registries["action"])

        assert [record.name for record in actions] == ["TurnOn", "TurnOff"]

    def test_unknown_ids_are_skipped(self, registries):
        devices = DeviceRegistry(name="device")
        devices.register(DeviceRecord(id=5, name="Lamp", actions=[2, 42]))

        assert [record.name for record in devices.actions_for_device("Lamp", registries["action"])] == ["TurnOn"]

    def test_unknown_device_has_no_actions(self, registries):
        assert registries["device"].actions_for_device("Nope", registries["action"]) == []

    def test_offers(self, registries):
        assert registries["device"].offers("Thermostat", "ReadTemp", registries["action"]) is True
        assert registries["device"].offers("Thermostat", "TurnOn", registries["action"]) is False
