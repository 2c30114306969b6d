"""Exceptions raised by the mention menu."""


class MentionMenuError(Exception):
    """Base class for mention menu failures."""


class TransportError(MentionMenuError):
    """A network call to the editor API failed.

    Raised for connection failures, timeouts and non-2xx responses. The
    underlying ``httpx`` exception is attached as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        method: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.status_code = status_code


class MalformedResponseError(MentionMenuError):
    """The API answered, but not with the expected envelope."""

    def __init__(self, message: str, method: str) -> None:
        super().__init__(message)
        self.method = method
