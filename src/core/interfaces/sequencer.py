"""Abstract interface for the region-scoped invoice number sequencer."""

from abc import ABC, abstractmethod

from src.core.entities.sequence import DocumentSequence


class IDocumentSequencer(ABC):
    """
    Issues unique, strictly increasing, gapless document numbers per region.

    ``next_number`` must be a single atomic increment-and-read in the store.
    On any failure no number is returned and the counter is unchanged.
    """

    @abstractmethod
    async def next_number(self, region: str) -> str:
        """Increment the region's counter and return the formatted number."""
        pass

    @abstractmethod
    async def peek_next_number(self, region: str) -> str:
        """Show the number the next issue would return, without issuing it."""
        pass

    @abstractmethod
    async def get_sequence(self, region: str) -> DocumentSequence | None:
        """Get the sequence row for a region."""
        pass
