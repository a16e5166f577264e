class NomenclatorError(Exception):
    """Base class for every failure raised by the name/key pipeline."""


class EntropyUnavailable(NomenclatorError):
    def __init__(self, requested: int, reason: str = None):
        self.requested = requested
        self.reason = reason or f"Secure random source could not supply {requested} bytes"
        super().__init__(self.reason)


class NameSpaceExhausted(NomenclatorError):
    def __init__(self, attempts: int, used: int = None, size: int = None):
        self.attempts = attempts
        self.used = used
        self.size = size
        message = f"failed to generate unique name after {attempts} retries"
        if used is not None and size is not None:
            message += f" ({used} of {size} names used)"
        super().__init__(message)


class SourceUnavailable(NomenclatorError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Name source {url} unavailable: {reason}")


class StoreIOError(NomenclatorError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Store {path} failed: {reason}")


class OperationTimeout(NomenclatorError):
    """A blocking call ran past its configured timeout."""

    timeout: float = None


class SourceTimeout(SourceUnavailable, OperationTimeout):
    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"no answer within {timeout}s")


class StoreTimeout(StoreIOError, OperationTimeout):
    def __init__(self, path: str, timeout: float):
        self.timeout = timeout
        super().__init__(path, f"lock not acquired within {timeout}s")
