"""Pre-save validation of receipt items.

Validation is the authoritative check on item data. The zero-melting guard
in the ledger only keeps the arithmetic from failing while a user edits;
a given item with a non-positive melting is still rejected here.
"""

from goldbook.domain.entities import (
    GivenItem,
    GivenTransaction,
    ReceivedItem,
    Side,
    WorkReceipt,
)
from goldbook.domain.errors import ItemValidationError
from goldbook.logging_config import get_logger

logger = get_logger(__name__)


def is_valid_given_item(item: GivenItem) -> bool:
    """Check name, pure weight, purity and melting of a given item."""
    return (
        bool(item.product_name and item.product_name.strip())
        and item.pure_weight > 0
        and item.pure_percent > 0
        and item.melting > 0
    )


def is_valid_received_item(item: ReceivedItem) -> bool:
    """Check name, ornament weight and making charge of a received item."""
    return (
        bool(item.product_name and item.product_name.strip())
        and item.final_ornaments_wt > 0
        and item.making_charge_percent >= 0
    )


def find_degenerate_items(transaction: GivenTransaction) -> list[int]:
    """Return indexes of given items whose melting is zero or negative."""
    return [index for index, item in enumerate(transaction.items) if item.melting <= 0]


def validate_receipt_for_save(receipt: WorkReceipt) -> None:
    """Validate both sides of a receipt before saving.

    Raises:
        ItemValidationError: For the first side holding an invalid item
    """
    degenerate = find_degenerate_items(receipt.given)
    if degenerate:
        logger.warning(
            "Receipt %s has given items with non-positive melting at %s",
            receipt.voucher_id or receipt.id,
            degenerate,
        )

    if not all(is_valid_given_item(item) for item in receipt.given.items):
        raise ItemValidationError(Side.GIVEN.value)
    if not all(is_valid_received_item(item) for item in receipt.received.items):
        raise ItemValidationError(Side.RECEIVED.value)
