# errors.py


class CountryServiceError(Exception):
    """Base class for failures of the outbound country lookup."""

    kind = "error"
    status_code = 502


class TransportError(CountryServiceError):
    """Connection refused, DNS failure, timeout or a non-SOAP HTTP error."""

    kind = "transport"


class MarshallingError(CountryServiceError):
    """The request or reply could not be mapped onto the expected types."""

    kind = "marshalling"


class RemoteFaultError(CountryServiceError):
    """The remote service answered with a SOAP 1.1 or 1.2 Fault."""

    kind = "remote_fault"

    def __init__(self, message, code=None, actor=None, detail=None, subcodes=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.actor = actor
        self.detail = detail
        self.subcodes = subcodes or []
