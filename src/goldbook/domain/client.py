"""Client domain service."""

from decimal import Decimal
from typing import Any, Optional

from goldbook.database.base import Database
from goldbook.domain.entities import Client as ClientEntity
from goldbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
    duplicate_client_name,
)
from goldbook.utils.numeric import parse_numeric_value, round_for_storage


class ClientService:
    """Service for managing workshop clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        shop_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        email: Optional[str] = None,
        balance: Any = 0,
    ) -> int:
        """Create a new client.

        Args:
            name: Client name (required, unique)
            shop_name: Optional shop name
            phone_number: Optional phone number
            address: Optional address
            email: Optional email
            balance: Opening balance in grams

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a client with that name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Client name is required")

        for existing in self.db.list_clients():
            if existing.name == name:
                raise ConflictError(duplicate_client_name(name))

        return self.db.create_client(
            name=name,
            shop_name=shop_name,
            phone_number=phone_number,
            address=address,
            email=email,
            balance=round_for_storage(parse_numeric_value(balance)),
        )

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self) -> list[ClientEntity]:
        """List all clients."""
        return self.db.list_clients()

    def search_clients(self, query: str) -> list[ClientEntity]:
        """Find clients whose name or shop name contains query (case-insensitive)."""
        needle = query.strip().lower()
        if not needle:
            return self.db.list_clients()
        return [
            client
            for client in self.db.list_clients()
            if needle in client.name.lower()
            or (client.shop_name is not None and needle in client.shop_name.lower())
        ]

    def resolve_client(self, client: str | int) -> ClientEntity:
        """Resolve a client name or ID to a client entity.

        Raises:
            NotFoundError: If no client matches
        """
        if isinstance(client, int):
            return self.require_client(client)

        try:
            client_id = int(client)
        except ValueError:
            client_id = None
        if client_id is not None:
            return self.require_client(client_id)

        for existing in self.db.list_clients():
            if existing.name == client:
                return existing
        raise NotFoundError(f"Client '{client}' not found")

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        shop_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Update client contact details.

        Raises:
            NotFoundError: If client not found
            ConflictError: If the new name is taken by another client
        """
        self.require_client(client_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Client name is required")
            for existing in self.db.list_clients():
                if existing.id != client_id and existing.name == name:
                    raise ConflictError(duplicate_client_name(name))

        self.db.update_client(
            client_id,
            name=name,
            shop_name=shop_name,
            phone_number=phone_number,
            address=address,
            email=email,
        )

    def delete_client(self, client_id: int) -> None:
        """Delete a client that has no receipts.

        Raises:
            NotFoundError: If client not found
            DependencyError: If receipts still reference the client
        """
        self.require_client(client_id)

        receipt_count = self.db.get_client_receipt_count(client_id)
        if receipt_count > 0:
            raise DependencyError(client_delete_blocked(client_id, receipt_count))

        self.db.delete_client(client_id)

    def get_balance(self, client_id: int) -> Decimal:
        """Return the running balance of a client."""
        return self.require_client(client_id).balance
