class FanOutError(Exception):
    """Request-level failure, reported to the caller as an HTTP error."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class MalformedRequest(FanOutError):
    status_code = 400

class NoTargets(FanOutError):
    status_code = 400

class DispatchFailure(FanOutError):
    status_code = 500

class BatchTimeout(FanOutError):
    status_code = 504
