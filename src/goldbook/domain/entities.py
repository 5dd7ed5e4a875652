"""Domain model entities for goldbook.

These are pure data classes representing workshop concepts, independent of
the database schema. Every entity is frozen: ledger edits build new values
with ``dataclasses.replace`` instead of mutating a draft in place.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")
ONE = Decimal("1")


class BalanceOperation(str, Enum):
    """Operation used for the manual reconciliation of a receipt."""

    SUBTRACT_GIVEN_RECEIVED = "subtract-given-received"
    SUBTRACT_RECEIVED_GIVEN = "subtract-received-given"
    ADD = "add"


class ReceiptKind(str, Enum):
    """Kind of ledger record."""

    RECEIPT = "receipt"
    ADMIN_RECEIPT = "admin-receipt"


class ReceiptStatus(str, Enum):
    """Completion status of a receipt."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    EMPTY = "empty"


class Side(str, Enum):
    """Transaction side of a receipt."""

    GIVEN = "given"
    RECEIVED = "received"


@dataclass(frozen=True)
class Client:
    """Workshop client domain entity."""

    id: int
    name: str
    shop_name: Optional[str]
    phone_number: Optional[str]
    address: Optional[str]
    email: Optional[str]
    balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class GivenItem:
    """Material issued to a client or worker."""

    product_name: str = ""
    pure_weight: Decimal = ZERO
    pure_percent: Decimal = ZERO
    melting: Decimal = ONE
    total: Decimal = ZERO
    date: Optional[date] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class ReceivedItem:
    """Ornaments or material returned to the workshop."""

    product_name: str = ""
    final_ornaments_wt: Decimal = ZERO
    stone_weight: Decimal = ZERO
    making_charge_percent: Decimal = ZERO
    sub_total: Decimal = ZERO
    total: Decimal = ZERO
    date: Optional[date] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class GivenTransaction:
    """Given side of a receipt with its aggregate totals."""

    date: Optional[date] = None
    items: tuple[GivenItem, ...] = ()
    total: Decimal = ZERO
    total_pure_weight: Decimal = ZERO


@dataclass(frozen=True)
class ReceivedTransaction:
    """Received side of a receipt with its aggregate totals."""

    date: Optional[date] = None
    items: tuple[ReceivedItem, ...] = ()
    total: Decimal = ZERO
    total_ornaments_wt: Decimal = ZERO
    total_stone_weight: Decimal = ZERO
    total_sub_total: Decimal = ZERO


@dataclass(frozen=True)
class ManualReconciliation:
    """Manual calculation shown next to the client balance."""

    given_total: Decimal
    received_total: Decimal
    operation: str
    result: Decimal


@dataclass(frozen=True)
class WorkReceipt:
    """Ledger record holding the given and received transactions."""

    client_id: int
    id: Optional[int] = None
    kind: ReceiptKind = ReceiptKind.ADMIN_RECEIPT
    voucher_id: str = ""
    status: ReceiptStatus = ReceiptStatus.EMPTY
    given: GivenTransaction = GivenTransaction()
    received: ReceivedTransaction = ReceivedTransaction()
    operation: str = BalanceOperation.SUBTRACT_GIVEN_RECEIVED.value
    manual_calculations: Optional[ManualReconciliation] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerResult:
    """Output of the ledger computation for one receipt."""

    receipt: WorkReceipt
    reconciliation: ManualReconciliation
    new_client_balance: Decimal


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a successful receipt save."""

    receipt: WorkReceipt
    previous_balance: Decimal
    new_client_balance: Decimal
