from __future__ import annotations

from typing import Any, Protocol


class LogPort(Protocol):
    """Logging collaborator owned by the host; a stdlib ``logging.Logger`` fits."""

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        ...

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        ...
