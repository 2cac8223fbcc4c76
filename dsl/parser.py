"""
Lenient reader for the definition text written by dsl.serializer.

Parsing never fails. Lines that are not understood are skipped and missing
values keep their model defaults, so hand-edited or truncated text still
yields a usable (possibly partial) AutomationDefinition.

Nesting is expressed by indentation in two space steps. Each block reader
below owns one depth: it consumes lines indented at least that far and
returns as soon as a line is not, leaving that line to its caller.
"""

import math
import re
from typing import Callable, List, Optional, TypeVar

from log import get_logger
from models import Action, AutomationDefinition, Condition, Trigger

from .serializer import INDENT

logger = get_logger(__name__)

T = TypeVar("T")

_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")
_LEADING_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class LineCursor:
    """Position in the list of lines being parsed."""

    def __init__(self, text: str) -> None:
        self.lines = text.split("\n")
        self.index = 0

    def at_end(self) -> bool:
        return self.index >= len(self.lines)

    def current(self) -> str:
        return self.lines[self.index]

    def stripped(self) -> str:
        return self.current().strip()

    def advance(self) -> None:
        self.index += 1

    def indented(self, depth: int) -> bool:
        return not self.at_end() and self.current().startswith(INDENT * depth)


def extract_value(line: str) -> str:
    """
    Value part of a ``key: value`` line. Everything after the first colon is
    kept (values may contain colons), then whitespace and one surrounding
    quote character on each side are removed.
    """
    _, _, remainder = line.partition(":")
    return _SURROUNDING_QUOTES.sub("", remainder.strip())


def leading_number(text: str) -> Optional[float]:
    """
    Number at the start of ``text``, ignoring whatever follows it, so a
    hand-written ``25C`` reads as 25. None when the text does not start with
    a number.
    """
    match = _LEADING_NUMBER.match(text.lstrip())
    if match is None:
        return None
    return float(match.group(0))


def coerce_threshold(text: str) -> float:
    # Unparsable thresholds collapse to zero rather than failing.
    value = leading_number(text)
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def _item_value(cursor: LineCursor) -> str:
    # "- device: x" -> "x"
    return extract_value(cursor.stripped()[2:])


def _parse_items(
    cursor: LineCursor, depth: int, opener: str, parse_item: Callable[[LineCursor], T]
) -> List[T]:
    items: List[T] = []
    while cursor.indented(depth):
        if cursor.stripped().startswith(opener):
            items.append(parse_item(cursor))
        else:
            cursor.advance()
    return items


def _parse_condition(cursor: LineCursor) -> Condition:
    field = _item_value(cursor)
    operator = ""
    threshold = 0.0
    cursor.advance()
    while cursor.indented(4) and not cursor.stripped().startswith("- "):
        line = cursor.stripped()
        if line.startswith("operator:"):
            operator = extract_value(line)
        elif line.startswith("threshold:"):
            threshold = coerce_threshold(extract_value(line))
        cursor.advance()
    return Condition(field=field, operator=operator, threshold=threshold)


def _parse_trigger(cursor: LineCursor) -> Trigger:
    device = _item_value(cursor)
    action = ""
    conditions: List[Condition] = []
    cursor.advance()
    while cursor.indented(2) and not cursor.stripped().startswith("- device:"):
        line = cursor.stripped()
        if line.startswith("action:"):
            action = extract_value(line)
            cursor.advance()
        elif line == "conditions:":
            cursor.advance()
            conditions.extend(_parse_items(cursor, 3, "- field:", _parse_condition))
        else:
            cursor.advance()
    return Trigger(device=device, action=action, conditions=conditions)


def _parse_action(cursor: LineCursor) -> Action:
    device = _item_value(cursor)
    action = ""
    cursor.advance()
    while cursor.indented(2) and not cursor.stripped().startswith("- "):
        line = cursor.stripped()
        if line.startswith("action:"):
            action = extract_value(line)
        cursor.advance()
    return Action(device=device, action=action)


def parse_definition(text: str) -> AutomationDefinition:
    cursor = LineCursor(text or "")
    interval = ""
    condition_logic = ""
    triggers: List[Trigger] = []
    actions: List[Action] = []

    while not cursor.at_end():
        line = cursor.stripped()
        if line.startswith("interval:"):
            interval = extract_value(line)
            cursor.advance()
        elif line.startswith("condition_logic:"):
            condition_logic = extract_value(line)
            cursor.advance()
        elif line == "triggers:":
            cursor.advance()
            triggers.extend(_parse_items(cursor, 1, "- device:", _parse_trigger))
        elif line == "actions:":
            cursor.advance()
            actions.extend(_parse_items(cursor, 1, "- device:", _parse_action))
        else:
            cursor.advance()

    logger.debug(
        "definition_parsed",
        lines=len(cursor.lines),
        triggers=len(triggers),
        actions=len(actions),
    )
    return AutomationDefinition(
        interval=interval,
        condition_logic=condition_logic,
        triggers=triggers,
        actions=actions,
    )
