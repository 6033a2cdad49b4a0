from __future__ import annotations


class ChartError(Exception):
    """Base class for failures surfaced by chart rendering."""


class EmptyDatasetError(ChartError):
    def __init__(self, message: str = "no plottable points in datasets") -> None:
        super().__init__(message)


class NotEnoughSpaceError(ChartError):
    def __init__(self, needed: float, available: float, what: str = "layout") -> None:
        self.needed = needed
        self.available = available
        super().__init__(f"not enough space to render {what}: needed {needed:g}, available {available:g}")


class InvalidDatasetsError(ChartError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid datasets: {reason}")


class FontLoadingError(ChartError):
    def __init__(self, name: str, cause: str | None = None) -> None:
        self.name = name
        message = f"failed to load font {name!r}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class DrawError(ChartError):
    """Backend failure while building text or drawing a primitive."""
