"""Shared domain error messages and error types."""

GENERIC_SAVE_FAILURE = "Failed to update receipt or client balance"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ItemValidationError(ValidationError):
    """Receipt items failed the pre-save checks on one side."""

    def __init__(self, side: str):
        self.side = side
        super().__init__(invalid_items(side))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class PersistenceError(DomainError):
    """The record store rejected a write during save."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def receipt_not_found(receipt_id: int) -> str:
    """Return message for missing receipt."""
    return f"Receipt {receipt_id} not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client name."""
    return f"Client with name '{name}' already exists"


def invalid_items(side: str) -> str:
    """Return message for items failing pre-save validation."""
    return f"Please fill all required fields for {side} items with valid values"


def item_index_out_of_range(side: str, index: int, count: int) -> str:
    """Return message for an item index outside the transaction."""
    return f"No {side} item at index {index} (receipt has {count} {side} item{'s' if count != 1 else ''})"


def unknown_item_field(side: str, field: str) -> str:
    """Return message for an unknown item field."""
    return f"Unknown {side} item field '{field}'"


def client_delete_blocked(client_id: int, receipt_count: int) -> str:
    """Return message when a client still has receipts."""
    return (
        f"Cannot delete client {client_id}: it has {receipt_count} "
        f"receipt{'s' if receipt_count != 1 else ''}. Please delete them first."
    )


def balance_restore_failed(message: str) -> str:
    """Return message when the compensating balance write also failed."""
    return (
        f"{message}. The client balance was already updated and could not be "
        "restored; reconcile it manually"
    )
