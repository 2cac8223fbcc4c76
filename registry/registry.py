from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, List, TypeVar


@dataclass
class ActionRecord:
    id: int
    name: str
    path: str
    params: str = ""


@dataclass
class DeviceRecord:
    id: int
    name: str
    type: str = ""
    chip: str = ""
    board: str = ""
    ip: str = ""
    actions: List[int] = field(default_factory=list)


RecordT = TypeVar("RecordT", ActionRecord, DeviceRecord)


@dataclass
class Registry(Generic[RecordT]):
    """Records keyed by name; definitions reference devices and actions by name."""

    name: str
    items: Dict[str, RecordT] = field(default_factory=dict)

    def register(self, record: RecordT) -> RecordT:
        self.items[record.name] = record
        return record

    def get(self, name: str) -> RecordT | None:
        return self.items.get(name)

    def get_by_id(self, record_id: int) -> RecordT | None:
        for record in self.items.values():
            if record.id == record_id:
                return record
        return None

    def __contains__(self, name: str) -> bool:
        return name in self.items

    def all(self) -> Iterable[RecordT]:
        return self.items.values()


@dataclass
class DeviceRegistry(Registry[DeviceRecord]):
    def actions_for_device(self, device_name: str, actions: Registry[ActionRecord]) -> List[ActionRecord]:
        """Actions assigned to a device, in the device's order. Unknown ids are skipped."""
        device = self.get(device_name)
        if device is None:
            return []
        records = (actions.get_by_id(action_id) for action_id in device.actions)
        return [record for record in records if record is not None]

    def offers(self, device_name: str, action_name: str, actions: Registry[ActionRecord]) -> bool:
        return any(record.name == action_name for record in self.actions_for_device(device_name, actions))
