"""Action-to-key bindings and key matching for Textual key events."""

from __future__ import annotations

from typing import Mapping, Sequence

KeyBinding = str | Sequence[str]

DEFAULT_KEYMAP: dict[str, KeyBinding] = {
    "up": ["k", "upArrow"],
    "down": ["j", "downArrow"],
    "top": "g",
    "bottom": "G",
    "openModal": ["enter", "o"],
    "toggleDone": ["x"],
    "delete": ["d", "D"],
    "add": "a",
    "quit": "q",
    "exportMd": "m",
    "exportCsv": "c",
}

# Binding names that refer to a Textual key name rather than a printed character
NAMED_KEYS = {
    "upArrow": "up",
    "downArrow": "down",
    "escape": "escape",
    "enter": "enter",
    "ctrl+c": "ctrl+c",
}


def normalize_keymap(keymap: Mapping[str, KeyBinding]) -> dict[str, list[str]]:
    """Turn every binding into a list of key names."""
    return {
        action: [binding] if isinstance(binding, str) else [str(b) for b in binding]
        for action, binding in keymap.items()
    }


def match_key(binding: KeyBinding, key: str, character: str | None = None) -> bool:
    bindings = [binding] if isinstance(binding, str) else binding
    for b in bindings:
        named = NAMED_KEYS.get(b)
        if named is not None:
            if key == named:
                return True
        elif b == key or (character is not None and b == character):
            return True
    return False


def action_for(keymap: Mapping[str, KeyBinding], key: str, character: str | None = None) -> str | None:
    """First action bound to the key, in keymap order."""
    for action, binding in keymap.items():
        if match_key(binding, key, character):
            return action
    return None
