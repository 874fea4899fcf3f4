class SignalDeskError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamUnavailableError(SignalDeskError):
    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider} unavailable: {reason}")
        self.provider = provider
        self.reason = reason


class UpstreamResponseError(SignalDeskError):
    def __init__(self, provider: str, status: str, reason: str) -> None:
        super().__init__(f"{provider} failed ({status}): {reason}")
        self.provider = provider
        self.status = status
        self.reason = reason


class InvalidRequestError(SignalDeskError):
    pass
