"""Errors raised by the ports that talk to collaborators outside the domain."""


class CollaboratorError(Exception):
    """A collaborator outside the domain could not serve a request."""

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message


class SourceUnavailable(CollaboratorError):
    """Master data (orders, warehouses, documents) could not be fetched."""


class ResourceRequestFailed(CollaboratorError):
    """A create/update request to the fulfillment API did not succeed."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
