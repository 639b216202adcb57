# smw_jump/game/input_state.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class InputState:
    """Keys the controller cares about, owned by one controller (no globals)."""
    left: bool = False
    right: bool = False
    jump_key: Optional[str] = None   # key that started the current jump, if held

    @property
    def steer_dir(self) -> int:
        """-1 left, +1 right, 0 none. Right wins when both are held."""
        if self.right:
            return 1
        if self.left:
            return -1
        return 0
