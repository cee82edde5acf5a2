"""Abstract interface for quotation storage."""

from abc import ABC, abstractmethod

from solarbooks.core.entities.quotation import Quotation, QuotationStatus


class IQuotationStore(ABC):
    """Interface for quotation and quotation line persistence."""

    @abstractmethod
    async def create_quotation(self, quotation: Quotation) -> Quotation:
        """Create a quotation together with its line items."""
        pass

    @abstractmethod
    async def get_quotation(self, quotation_id: int) -> Quotation | None:
        pass

    @abstractmethod
    async def update_quotation(self, quotation: Quotation) -> Quotation:
        """Update status fields (status, sent/accepted dates, rejection reason)."""
        pass

    @abstractmethod
    async def list_quotations(
        self,
        status: QuotationStatus | None = None,
        lead_id: int | None = None,
        client: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Quotation]:
        """List quotations, newest first. Line items are not loaded."""
        pass

    @abstractmethod
    async def next_sequence(self, number_prefix: str) -> int:
        pass
