"""
Interaction state owned by the action dispatcher.

The scene index and dynamics flag are updated optimistically, before the
matching bridge call, and are not rolled back when that call fails. Local
state can therefore drift from the bridge until the next successful action.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


def parse_scene_list(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma-separated scene id list.

    Whitespace around ids is stripped and empty entries are dropped, so
    "" and None both yield an empty tuple (scene features disabled).
    """
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass
class InteractionState:
    """Current scene index and dynamics flag for a fixed scene list"""
    scenes: Tuple[str, ...] = field(default_factory=tuple)
    scene_index: int = 0
    dynamics_enabled: bool = True

    def __post_init__(self):
        self.scenes = tuple(self.scenes)
        if self.scenes and not 0 <= self.scene_index < len(self.scenes):
            raise ValueError(
                f"scene_index {self.scene_index} out of range for {len(self.scenes)} scenes"
            )

    @property
    def has_scenes(self) -> bool:
        return bool(self.scenes)

    @property
    def current_scene(self) -> Optional[str]:
        if not self.scenes:
            return None
        return self.scenes[self.scene_index]

    def advance_scene(self) -> str:
        """Move forward one scene (wrapping) and return the new current scene id"""
        if not self.scenes:
            raise IndexError("no scenes configured")
        self.scene_index = (self.scene_index + 1) % len(self.scenes)
        return self.scenes[self.scene_index]

    def toggle_dynamics(self) -> bool:
        self.dynamics_enabled = not self.dynamics_enabled
        return self.dynamics_enabled
