"""Domain layer for goldbook application.

Services (ClientService, ReceiptService) depend on the database layer and
are imported from their own modules.
"""

from goldbook.domain.entities import (
    BalanceOperation,
    Client,
    GivenItem,
    GivenTransaction,
    LedgerResult,
    ManualReconciliation,
    ReceiptKind,
    ReceiptStatus,
    ReceivedItem,
    ReceivedTransaction,
    SaveResult,
    Side,
    WorkReceipt,
)

__all__ = [
    "BalanceOperation",
    "Client",
    "GivenItem",
    "GivenTransaction",
    "LedgerResult",
    "ManualReconciliation",
    "ReceiptKind",
    "ReceiptStatus",
    "ReceivedItem",
    "ReceivedTransaction",
    "SaveResult",
    "Side",
    "WorkReceipt",
]
