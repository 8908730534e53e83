from typing import Mapping, Protocol


class Accumulator(Protocol):
    """
    Sink the host hands to the collector. Records are counters.
    """

    def emit(self, name: str, tags: Mapping[str, str], fields: Mapping[str, int]) -> None:
        ...

    def add_error(self, error: Exception) -> None:
        ...


class Logger(Protocol):
    """The subset of logging.Logger the collector relies on."""

    def debug(self, msg: str, *args: object) -> None: ...

    def info(self, msg: str, *args: object) -> None: ...

    def warning(self, msg: str, *args: object) -> None: ...

    def error(self, msg: str, *args: object) -> None: ...
