"""Balance reconciliation rules.

Two independent quantities are derived from the same given and received
totals:

- the manual reconciliation, whose operation the user picks and which is
  only displayed and stored on the receipt, and
- the new client balance, which always subtracts received from given and
  is what gets written to the client record.
"""

from decimal import Decimal
from typing import Any, Optional

from goldbook.domain.entities import BalanceOperation, ManualReconciliation
from goldbook.logging_config import get_logger
from goldbook.utils.numeric import parse_numeric_value, round_for_storage

logger = get_logger(__name__)

DEFAULT_OPERATION = BalanceOperation.SUBTRACT_GIVEN_RECEIVED


def normalize_operation(operation: Optional[str]) -> str:
    """Return the operation value, substituting the default when unset."""
    if operation is None or operation == "":
        return DEFAULT_OPERATION.value
    if isinstance(operation, BalanceOperation):
        return operation.value
    return str(operation)


def calculate_balance(given_total: Any, received_total: Any, operation: Optional[str] = None) -> Decimal:
    """Apply a manual reconciliation operation to the two totals.

    Args:
        given_total: Total of the given side
        received_total: Total of the received side
        operation: One of the BalanceOperation values; None means the default

    Returns:
        Reconciliation result, or 0 for an unrecognized operation
    """
    given = parse_numeric_value(given_total)
    received = parse_numeric_value(received_total)

    try:
        op = BalanceOperation(normalize_operation(operation))
    except ValueError:
        logger.debug("Unknown balance operation %r, result is 0", operation)
        return Decimal("0")

    if op is BalanceOperation.SUBTRACT_GIVEN_RECEIVED:
        return given - received
    if op is BalanceOperation.SUBTRACT_RECEIVED_GIVEN:
        return received - given
    return given + received


def calculate_new_client_balance(given_total: Any, received_total: Any, previous_balance: Any) -> Decimal:
    """Return (given - received) + previous balance."""
    given = parse_numeric_value(given_total)
    received = parse_numeric_value(received_total)
    return (given - received) + parse_numeric_value(previous_balance)


def build_manual_reconciliation(
    given_total: Any, received_total: Any, operation: Optional[str] = None
) -> ManualReconciliation:
    """Build the manual reconciliation summary for display."""
    return ManualReconciliation(
        given_total=parse_numeric_value(given_total),
        received_total=parse_numeric_value(received_total),
        operation=normalize_operation(operation),
        result=calculate_balance(given_total, received_total, operation),
    )


def round_reconciliation(reconciliation: ManualReconciliation) -> ManualReconciliation:
    """Round a reconciliation for persistence."""
    return ManualReconciliation(
        given_total=round_for_storage(reconciliation.given_total),
        received_total=round_for_storage(reconciliation.received_total),
        operation=reconciliation.operation,
        result=round_for_storage(reconciliation.result),
    )
