"""Abstract interface for client storage."""

from abc import ABC, abstractmethod

from src.core.entities.client import Client


class IClientStore(ABC):
    """Interface for client persistence."""

    @abstractmethod
    async def create_client(self, client: Client) -> Client:
        """Create a client."""
        pass

    @abstractmethod
    async def get_client(self, client_id: int) -> Client | None:
        """Get client by ID."""
        pass

    @abstractmethod
    async def list_clients(
        self, region: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Client]:
        """List clients, optionally restricted to one region."""
        pass
