from __future__ import annotations


class ToggleFlag:
    """Session-wide boolean cell shared by reference between views.

    Every controller and presenter holds the same instance, so a toggle made
    in one view is what the next view renders with. Never copy ``value`` out
    and store it elsewhere.
    """

    __slots__ = ("value",)

    def __init__(self, value: bool = True) -> None:
        self.value = bool(value)

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"ToggleFlag({self.value!r})"

    def toggle(self) -> bool:
        self.value = not self.value
        return self.value
