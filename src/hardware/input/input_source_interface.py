from typing import List, NamedTuple, Protocol


class RawInputEvent(NamedTuple):
    """(event class, code, value) as delivered by the kernel"""
    type: int
    code: int
    value: int


class IInputEventSource(Protocol):
    """
    Input event source abstraction.

    read_events() waits for the next batch of events and returns them in
    arrival order. An empty list means "nothing yet", not end of stream.
    Read failures raise OSError.
    """

    async def read_events(self) -> List[RawInputEvent]:
        ...

    def close(self) -> None:
        ...
