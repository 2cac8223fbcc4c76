from .session import ActionSection, BuilderSession, ConditionRow, TriggerSection

__all__ = ["ActionSection", "BuilderSession", "ConditionRow", "TriggerSection"]
