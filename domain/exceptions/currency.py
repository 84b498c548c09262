class CurrencyException(Exception):
    pass


class ProviderError(CurrencyException):
    pass


class RateLimitedError(ProviderError):
    def __init__(self):
        super().__init__("rate limited by server")


class HttpStatusError(ProviderError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"http status {status_code}")


class TransportError(ProviderError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"connection failure: {detail}")


class ResponseParseError(TransportError):
    pass


class ServiceNotReadyError(CurrencyException):
    pass
