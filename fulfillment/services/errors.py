class FulfillmentError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(FulfillmentError):
    """Caller-supplied intent or parameter is missing or malformed."""

    status_code = 400


class InvalidSessionError(BadRequestError):
    pass


class ConfigError(FulfillmentError):
    """Operator configuration is missing or unusable."""


class MappingNotFoundError(FulfillmentError):
    """No city mapping record exists for the requested key."""
