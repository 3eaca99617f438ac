"""Resource gateway port: method + path + JSON body in, JSON body out."""

from abc import ABC, abstractmethod


class ResourceGateway(ABC):
    """Abstract interface for resource gateways."""

    @abstractmethod
    def request(self, method: str, path: str, body: dict | None = None) -> dict:
        """Send one request and return the decoded response body.

        Raises:
            ResourceRequestFailed: the request did not succeed. ``message``
                holds the server-supplied message when there was one.
        """
        ...
