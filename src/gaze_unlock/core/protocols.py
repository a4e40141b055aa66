from typing import Protocol, runtime_checkable

from ..models import ProgressSnapshot


@runtime_checkable
class UnlockView(Protocol):
    """
    Defines the methods required for any peripheral layer of the unlock flow.
    Whether it's a window, a web page or a console, it must support these calls.
    """
    async def show_status(self, text: str) -> None: ...

    async def show_progress(self, snapshot: ProgressSnapshot) -> None: ...

    async def show_point(self, x: float, y: float) -> None: ...

    async def hide_point(self) -> None: ...

    async def navigate(self, url: str) -> None: ...
