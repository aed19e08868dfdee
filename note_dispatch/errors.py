"""Failures a single dispatch can end in."""


class DispatchError(Exception):
    """Base class for everything a send can fail with."""


class ReadError(DispatchError):
    """The host could not read the file's text or bytes."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class HttpStatusError(DispatchError):
    """The webhook answered, but not with a 2xx status."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Webhook {url} answered with HTTP {status_code}")


class NetworkError(DispatchError):
    """The request never completed (DNS, refused connection, timeout...)."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not reach webhook {url}: {reason}")
