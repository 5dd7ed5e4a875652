"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from goldbook.domain.entities import Client, ReceiptKind, WorkReceipt


class Database(ABC):
    """Abstract record store for goldbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        shop_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        email: Optional[str] = None,
        balance: Decimal = Decimal("0"),
    ) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients ordered by name."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        shop_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Update client contact fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def update_client_balance(self, client_id: int, balance: Decimal) -> None:
        """Overwrite the running balance of a client."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client."""
        pass

    @abstractmethod
    def get_client_receipt_count(self, client_id: int) -> int:
        """Get count of receipts referencing a client."""
        pass

    # Receipt operations
    @abstractmethod
    def create_receipt(self, receipt: WorkReceipt) -> int:
        """Store a new receipt with its items. Returns receipt ID."""
        pass

    @abstractmethod
    def get_receipt(self, receipt_id: int) -> Optional[WorkReceipt]:
        """Get receipt by ID, including items."""
        pass

    @abstractmethod
    def list_receipts(
        self,
        client_id: Optional[int] = None,
        kind: Optional[ReceiptKind] = None,
    ) -> list[WorkReceipt]:
        """List receipts, optionally filtered by client and kind."""
        pass

    @abstractmethod
    def update_receipt(self, receipt: WorkReceipt) -> None:
        """Replace a stored receipt, including its items, by receipt.id."""
        pass

    @abstractmethod
    def delete_receipt(self, receipt_id: int) -> None:
        """Delete a receipt and its items."""
        pass

    @abstractmethod
    def list_voucher_ids_with_prefix(self, prefix: str) -> list[str]:
        """List voucher IDs that start with prefix."""
        pass
