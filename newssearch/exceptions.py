class InvalidRequestError(Exception):
    """Raised when incoming query parameters cannot be used."""


class IntegrationError(Exception):
    """Raised when the News API call fails or returns unusable data."""
