"""Errors raised by the upstream rate fetchers."""


class SourceUnavailable(Exception):
    """An upstream rate service failed or returned unusable data."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message
