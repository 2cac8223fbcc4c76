from .registry import ActionRecord, DeviceRecord, DeviceRegistry, Registry


def create_default_registries() -> dict[str, Registry]:
    """Create starter registries for devices and the actions they expose."""
    action_registry: Registry[ActionRecord] = Registry(name="action")
    read_temp = action_registry.register(ActionRecord(id=1, name="ReadTemp", path="sensor.read"))
    turn_on = action_registry.register(ActionRecord(id=2, name="TurnOn", path="switch.set", params='{"on": true}'))
    turn_off = action_registry.register(ActionRecord(id=3, name="TurnOff", path="switch.set", params='{"on": false}'))

    device_registry = DeviceRegistry(name="device")
    device_registry.register(
        DeviceRecord(
            id=1,
            name="Thermostat",
            type="sensor",
            chip="esp32",
            board="devkit-v1",
            ip="192.168.1.20",
            actions=[read_temp.id],
        )
    )
    device_registry.register(
        DeviceRecord(
            id=2,
            name="Fan",
            type="switch",
            chip="esp8266",
            board="d1-mini",
            ip="192.168.1.21",
            actions=[turn_on.id, turn_off.id],
        )
    )

    return {
        "device": device_registry,
        "action": action_registry,
    }
