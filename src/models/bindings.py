"""ActionBinding - static map from raw key code to LightAction"""

from typing import Dict, Optional

from models.enums import InputKey, LightAction


FIXED_BINDINGS: Dict[int, LightAction] = {
    InputKey.F18: LightAction.DIM,
    InputKey.F19: LightAction.BRIGHTEN,
    InputKey.F16: LightAction.NEXT_SCENE,
    InputKey.F15: LightAction.TOGGLE_DYNAMICS,
}


class ActionBinding:
    """
    Code -> action lookup, fixed at construction.

    Only the power toggle code is configurable. The knob and scene button
    codes are properties of the device. When the configured code collides
    with a fixed one, the configured binding wins.
    """

    def __init__(self, primary_code: int = InputKey.F17):
        self.primary_code = int(primary_code)
        self._bindings: Dict[int, LightAction] = {int(code): action for code, action in FIXED_BINDINGS.items()}
        self._bindings[self.primary_code] = LightAction.TOGGLE_POWER

    def resolve(self, code: int) -> Optional[LightAction]:
        return self._bindings.get(code)

    def describe(self) -> str:
        """One-line summary for the startup log"""
        return ", ".join(
            f"{action.name}={code}" for code, action in sorted(self._bindings.items())
        )
