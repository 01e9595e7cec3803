"""
Input State
===========

Translates key-down/key-up events into the held-key snapshot the simulation
reads once per tick. Unbound identifiers are dropped silently.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from asteroid_field.asteroids_core.config_loader import GameConfig, get_config
from asteroid_field.asteroids_core.entities import Keys

ACTION_LEFT = "left"
ACTION_RIGHT = "right"
ACTION_THRUST = "thrust"
ACTION_FIRE = "fire"
ACTION_CONFIRM = "confirm"


class InputState:
    """
    Held keys plus a latched confirm press.

    Held state is tracked per key id, so an action stays active while any of
    its bound keys is down. Confirm is edge-triggered: a key-down sets the
    latch and the next tick consumes it, whatever state the game is in.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._bindings: Dict[str, str] = config.controls.bindings()
        self._keys_for: Dict[str, List[str]] = {}
        for key_id, action in self._bindings.items():
            self._keys_for.setdefault(action, []).append(key_id)
        self._held: Set[str] = set()
        self._confirm_pending: bool = False

    def action_for(self, key_id: str) -> Optional[str]:
        """Action bound to a key identifier, or None."""
        return self._bindings.get(key_id)

    def key_down(self, key_id: str) -> bool:
        """
        Register a key press.

        Returns:
            True if the key is bound to an action.
        """
        action = self.action_for(key_id)
        if action is None:
            return False
        if action == ACTION_CONFIRM:
            self._confirm_pending = True
        else:
            self._held.add(key_id)
        return True

    def key_up(self, key_id: str) -> bool:
        """Register a key release. Returns True if the key is bound."""
        if self.action_for(key_id) is None:
            return False
        self._held.discard(key_id)
        return True

    def is_active(self, action: str) -> bool:
        """True while any key bound to ``action`` is held."""
        return any(self._bindings[key_id] == action for key_id in self._held)

    def set_keys(self, keys: Keys) -> None:
        """
        Replace the held set wholesale (used by agents and replays).

        Each active action is held through its first bound key.
        """
        self._held.clear()
        for action, active in (
            (ACTION_LEFT, keys.left),
            (ACTION_RIGHT, keys.right),
            (ACTION_THRUST, keys.up),
            (ACTION_FIRE, keys.space),
        ):
            if active:
                self._held.add(self._keys_for[action][0])

    def press_confirm(self) -> None:
        self._confirm_pending = True

    def snapshot(self) -> Keys:
        """Immutable copy of the currently held keys."""
        return Keys(
            left=self.is_active(ACTION_LEFT),
            right=self.is_active(ACTION_RIGHT),
            up=self.is_active(ACTION_THRUST),
            space=self.is_active(ACTION_FIRE)
        )

    def consume_confirm(self) -> bool:
        """Return and clear the confirm latch."""
        pending = self._confirm_pending
        self._confirm_pending = False
        return pending

    @property
    def confirm_pending(self) -> bool:
        return self._confirm_pending

    def clear(self) -> None:
        self._held.clear()
        self._confirm_pending = False
