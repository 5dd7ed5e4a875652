"""Ledger computation engine.

Pure functions that turn given and received line items into derived item
fields, per-side aggregate totals and the client balance projection. Every
operation takes a value and returns a new one; nothing here touches the
database.

Aggregates are always rebuilt from the full item list, never patched
incrementally.
"""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from goldbook.domain.balance import (
    build_manual_reconciliation,
    calculate_new_client_balance,
    normalize_operation,
    round_reconciliation,
)
from goldbook.domain.entities import (
    GivenItem,
    GivenTransaction,
    LedgerResult,
    ONE,
    ReceiptStatus,
    ReceivedItem,
    ReceivedTransaction,
    Side,
    WorkReceipt,
    ZERO,
)
from goldbook.domain.errors import (
    ValidationError,
    item_index_out_of_range,
    unknown_item_field,
)
from goldbook.logging_config import get_logger
from goldbook.utils.date_parser import parse_date
from goldbook.utils.numeric import parse_numeric_value, round_for_storage

logger = get_logger(__name__)

HUNDRED = Decimal("100")

GIVEN_WEIGHT_FIELDS = ("pure_weight", "pure_percent", "melting")
RECEIVED_WEIGHT_FIELDS = ("final_ornaments_wt", "stone_weight", "making_charge_percent")
TEXT_FIELDS = ("product_name", "date")


# Item rules


def calculate_given_total(pure_weight: Decimal, pure_percent: Decimal, melting: Decimal) -> Decimal:
    """Return (pure_weight * pure_percent) / melting, dividing by 1 for a zero melting."""
    if not melting:
        logger.debug("Zero melting on given item, dividing by 1")
        melting = ONE
    return (pure_weight * pure_percent) / melting


def recalculate_given_item(item: GivenItem) -> GivenItem:
    """Refresh the derived total of a given item."""
    return replace(
        item,
        total=calculate_given_total(item.pure_weight, item.pure_percent, item.melting),
    )


def recalculate_received_item(item: ReceivedItem) -> ReceivedItem:
    """Refresh sub_total and total of a received item.

    A stone weight above the ornament weight yields a negative sub_total.
    """
    sub_total = item.final_ornaments_wt - item.stone_weight
    total = sub_total * (ONE + item.making_charge_percent / HUNDRED)
    return replace(item, sub_total=sub_total, total=total)


def _coerce_field(field: str, value: Any) -> Any:
    if field == "product_name":
        return "" if value is None else str(value)
    if field == "date":
        if value is None or isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, datetime):
            return value.date()
        try:
            return parse_date(str(value))
        except ValueError as e:
            raise ValidationError(str(e)) from e
    return parse_numeric_value(value)


def update_given_item(item: GivenItem, field: str, value: Any) -> GivenItem:
    """Set one field of a given item and refresh its total when needed.

    Raises:
        ValidationError: If the field is not editable
    """
    if field not in GIVEN_WEIGHT_FIELDS and field not in TEXT_FIELDS:
        raise ValidationError(unknown_item_field(Side.GIVEN.value, field))
    updated = replace(item, **{field: _coerce_field(field, value)})
    if field in GIVEN_WEIGHT_FIELDS:
        updated = recalculate_given_item(updated)
    return updated


def update_received_item(item: ReceivedItem, field: str, value: Any) -> ReceivedItem:
    """Set one field of a received item and refresh its totals when needed.

    Raises:
        ValidationError: If the field is not editable
    """
    if field not in RECEIVED_WEIGHT_FIELDS and field not in TEXT_FIELDS:
        raise ValidationError(unknown_item_field(Side.RECEIVED.value, field))
    updated = replace(item, **{field: _coerce_field(field, value)})
    if field in RECEIVED_WEIGHT_FIELDS:
        updated = recalculate_received_item(updated)
    return updated


# Transaction aggregates


def summarize_given(transaction: GivenTransaction, items: Iterable[GivenItem]) -> GivenTransaction:
    """Rebuild the given-side aggregates from the item list.

    total_pure_weight uses a fixed divisor of 100, not the item's melting.
    """
    items = tuple(items)
    return replace(
        transaction,
        items=items,
        total=sum((item.total for item in items), ZERO),
        total_pure_weight=sum(
            (item.pure_weight * item.pure_percent / HUNDRED for item in items), ZERO
        ),
    )


def summarize_received(
    transaction: ReceivedTransaction, items: Iterable[ReceivedItem]
) -> ReceivedTransaction:
    """Rebuild the received-side aggregates from the item list."""
    items = tuple(items)
    return replace(
        transaction,
        items=items,
        total=sum((item.total for item in items), ZERO),
        total_ornaments_wt=sum((item.final_ornaments_wt for item in items), ZERO),
        total_stone_weight=sum((item.stone_weight for item in items), ZERO),
        total_sub_total=sum((item.sub_total for item in items), ZERO),
    )


def _check_index(side: Side, index: int, count: int) -> None:
    if index < 0 or index >= count:
        raise ValidationError(item_index_out_of_range(side.value, index, count))


def apply_given_item_change(
    transaction: GivenTransaction, index: int, field: str, value: Any
) -> GivenTransaction:
    """Edit one given item and rebuild the given aggregates."""
    _check_index(Side.GIVEN, index, len(transaction.items))
    items = list(transaction.items)
    items[index] = update_given_item(items[index], field, value)
    return summarize_given(transaction, items)


def apply_received_item_change(
    transaction: ReceivedTransaction, index: int, field: str, value: Any
) -> ReceivedTransaction:
    """Edit one received item and rebuild the received aggregates."""
    _check_index(Side.RECEIVED, index, len(transaction.items))
    items = list(transaction.items)
    items[index] = update_received_item(items[index], field, value)
    return summarize_received(transaction, items)


def add_given_item(
    transaction: GivenTransaction, item_date: Optional[date] = None, **fields: Any
) -> GivenTransaction:
    """Append a new given item (melting 1, total 0) with optional field values."""
    item = GivenItem(date=item_date or transaction.date or date.today())
    for field, value in fields.items():
        item = update_given_item(item, field, value)
    return summarize_given(transaction, transaction.items + (item,))


def add_received_item(
    transaction: ReceivedTransaction, item_date: Optional[date] = None, **fields: Any
) -> ReceivedTransaction:
    """Append a new received item (all weights 0) with optional field values."""
    item = ReceivedItem(date=item_date or transaction.date or date.today())
    for field, value in fields.items():
        item = update_received_item(item, field, value)
    return summarize_received(transaction, transaction.items + (item,))


def remove_given_item(transaction: GivenTransaction, index: int) -> GivenTransaction:
    """Remove a given item and rebuild the given aggregates."""
    _check_index(Side.GIVEN, index, len(transaction.items))
    items = transaction.items[:index] + transaction.items[index + 1:]
    return summarize_given(transaction, items)


def remove_received_item(transaction: ReceivedTransaction, index: int) -> ReceivedTransaction:
    """Remove a received item and rebuild the received aggregates."""
    _check_index(Side.RECEIVED, index, len(transaction.items))
    items = transaction.items[:index] + transaction.items[index + 1:]
    return summarize_received(transaction, items)


# Receipt reducer


def parse_side(side: str | Side) -> Side:
    """Convert "given" or "received" to a Side.

    Raises:
        ValidationError: If the side is unknown
    """
    try:
        return Side(side)
    except ValueError:
        raise ValidationError(f"Unknown side '{side}'. Use 'given' or 'received'")


def apply_item_change(
    receipt: WorkReceipt, side: str | Side, index: int, field: str, value: Any
) -> WorkReceipt:
    """Return a new receipt with one item field changed and that side recomputed."""
    if parse_side(side) is Side.GIVEN:
        return replace(receipt, given=apply_given_item_change(receipt.given, index, field, value))
    return replace(
        receipt, received=apply_received_item_change(receipt.received, index, field, value)
    )


def add_item(
    receipt: WorkReceipt, side: str | Side, item_date: Optional[date] = None, **fields: Any
) -> WorkReceipt:
    """Return a new receipt with an item appended to one side."""
    if parse_side(side) is Side.GIVEN:
        return replace(receipt, given=add_given_item(receipt.given, item_date, **fields))
    return replace(receipt, received=add_received_item(receipt.received, item_date, **fields))


def remove_item(receipt: WorkReceipt, side: str | Side, index: int) -> WorkReceipt:
    """Return a new receipt with one item removed from one side."""
    if parse_side(side) is Side.GIVEN:
        return replace(receipt, given=remove_given_item(receipt.given, index))
    return replace(receipt, received=remove_received_item(receipt.received, index))


def set_operation(receipt: WorkReceipt, operation: Optional[str]) -> WorkReceipt:
    """Return a new receipt with the manual reconciliation operation changed."""
    return replace(receipt, operation=normalize_operation(operation))


def recompute_receipt(receipt: WorkReceipt) -> WorkReceipt:
    """Recompute every derived item field and both aggregates."""
    given = summarize_given(
        receipt.given, (recalculate_given_item(item) for item in receipt.given.items)
    )
    received = summarize_received(
        receipt.received,
        (recalculate_received_item(item) for item in receipt.received.items),
    )
    return replace(receipt, given=given, received=received)


def determine_status(receipt: WorkReceipt) -> ReceiptStatus:
    """Derive the completion status from which sides hold items."""
    has_given = len(receipt.given.items) > 0
    has_received = len(receipt.received.items) > 0
    if has_given and has_received:
        return ReceiptStatus.COMPLETE
    if has_given or has_received:
        return ReceiptStatus.INCOMPLETE
    return ReceiptStatus.EMPTY


def compute_ledger(receipt: WorkReceipt, previous_balance: Any) -> LedgerResult:
    """Compute derived fields, manual reconciliation and new client balance.

    Args:
        receipt: Draft receipt
        previous_balance: Client balance read before the receipt was edited

    Returns:
        LedgerResult with the recomputed receipt (its status refreshed)
    """
    recomputed = recompute_receipt(receipt)
    recomputed = replace(recomputed, status=determine_status(recomputed))
    given_total = recomputed.given.total
    received_total = recomputed.received.total
    return LedgerResult(
        receipt=recomputed,
        reconciliation=build_manual_reconciliation(
            given_total, received_total, recomputed.operation
        ),
        new_client_balance=calculate_new_client_balance(
            given_total, received_total, previous_balance
        ),
    )


def round_receipt_for_storage(receipt: WorkReceipt) -> WorkReceipt:
    """Round every derived field to two decimals before it is persisted."""
    given = replace(
        receipt.given,
        items=tuple(
            replace(item, total=round_for_storage(item.total)) for item in receipt.given.items
        ),
        total=round_for_storage(receipt.given.total),
        total_pure_weight=round_for_storage(receipt.given.total_pure_weight),
    )
    received = replace(
        receipt.received,
        items=tuple(
            replace(
                item,
                sub_total=round_for_storage(item.sub_total),
                total=round_for_storage(item.total),
            )
            for item in receipt.received.items
        ),
        total=round_for_storage(receipt.received.total),
        total_ornaments_wt=round_for_storage(receipt.received.total_ornaments_wt),
        total_stone_weight=round_for_storage(receipt.received.total_stone_weight),
        total_sub_total=round_for_storage(receipt.received.total_sub_total),
    )
    manual = receipt.manual_calculations
    if manual is not None:
        manual = round_reconciliation(manual)
    return replace(receipt, given=given, received=received, manual_calculations=manual)
