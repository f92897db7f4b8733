"""Message lookup for player-facing text.

Keys are stable identifiers; ``message()`` resolves them against the English
catalog and falls back to the key itself so a missing entry is visible
instead of fatal.
"""

from typing import Dict

ROOM_DESCRIPTIONS = [
    "ROOM_COBBLESTONE",
    "ROOM_COURTYARD",
    "ROOM_GARDEN",
    "ROOM_WORKSHOP",
    "ROOM_KITCHEN",
    "ROOM_BANQUET",
]

CATALOG: Dict[str, str] = {
    "ROOM_COBBLESTONE": "Cobblestone Corridor",
    "ROOM_COURTYARD": "Courtyard",
    "ROOM_GARDEN": "Overgrown Garden",
    "ROOM_WORKSHOP": "Dusty Workshop",
    "ROOM_KITCHEN": "Kitchen",
    "ROOM_BANQUET": "Banquet Hall",
    "IN_ROOM": "You are in the",
    "OPEN_DOOR": "You open the door and step into the ",
    "NOTHING_THERE": "There is nothing in that direction.",
    "NEED_ITEM": "To enter, you need: {item}",
    "BAD_DIRECTION": "That is not a direction you can walk.",
    "UNKNOWN_COMMAND": "I do not understand that.",
    "ITEM_INVENTORY": "You are carrying {count} item(s).",
    "PICKED_UP": "Picked up item {item}",
    "NO_HINTS": "Nobody has left any hints here.",
    "EXIT": "You unlock the gate and escape the castle. Well done!",
    "GOODBYE": "Goodbye.",
    "ENTER_CONTINUE": "Press enter to continue...",
}


def message(key: str, **fmt) -> str:
    text = CATALOG.get(key, key)
    if fmt:
        return text.format(**fmt)
    return text


__all__ = ["ROOM_DESCRIPTIONS", "CATALOG", "message"]
