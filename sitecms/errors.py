"""Error taxonomy surfaced by the content API."""


class SiteContentError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(SiteContentError):
    status_code = 404
    default_message = "Not found"


class Unauthorized(SiteContentError):
    status_code = 401
    default_message = "Unauthorized: invalid admin key"


class BadRequest(SiteContentError):
    status_code = 400
    default_message = "Bad request"


class PayloadTooLarge(SiteContentError):
    status_code = 413
    default_message = "File too large"


class StorageCorruption(SiteContentError):
    """Persisted document could not be parsed. Recovered inside the store."""

    default_message = "Stored content is not valid JSON"
