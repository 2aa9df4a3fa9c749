"""Exceptions raised by monitors and their collaborators."""


class MonitorError(Exception):
    """Base class for all monitor errors."""


class ConfigurationMissingError(MonitorError):
    """The page or channel named by a monitor no longer exists.

    This indicates a stale or misconfigured monitor and is never retried.
    """

    def __init__(self, code: str, content_type: str, name: str) -> None:
        self.code = code
        self.content_type = content_type
        self.name = name
        super().__init__(
            f"{content_type} source '{name}' does not exist for monitor {code}"
        )


class FetchError(MonitorError):
    """A crawler could not retrieve or parse a listing."""


class DetailResolutionError(MonitorError):
    """A crawler could not resolve the details of a single item."""


class AbnormalDecreaseError(MonitorError):
    """The number of items in a listing dropped by more than the threshold."""

    def __init__(self, decrease: float) -> None:
        self.decrease = decrease
        super().__init__(f"Detected abnormal decrease in items: {decrease:.2f}%")
