"""Abstract base class for upstream fetchers."""

from abc import ABC, abstractmethod

from edge_origin.shared.models import RequestDescriptor, UpstreamResult


class UpstreamFetcher(ABC):
    """Abstract interface for fetching one resource from an origin."""

    @abstractmethod
    async def fetch(self, request: RequestDescriptor) -> UpstreamResult:
        """
        Fetch the resource addressed by a request.

        Args:
            request: Incoming edge request

        Returns:
            Tagged upstream result

        Raises:
            NotFoundError: If the resource does not exist
            Exception: For filesystem or transport errors, unmapped
        """
        pass
