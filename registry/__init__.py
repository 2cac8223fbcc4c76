from .defaults import create_default_registries
from .registry import ActionRecord, DeviceRecord, DeviceRegistry, Registry

__all__ = ["ActionRecord", "DeviceRecord", "DeviceRegistry", "Registry", "create_default_registries"]
