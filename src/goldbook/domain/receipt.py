"""Receipt domain service."""

from dataclasses import replace
from datetime import date
from typing import Optional

from goldbook.database.base import Database
from goldbook.domain.entities import (
    Client,
    GivenTransaction,
    LedgerResult,
    ReceiptKind,
    ReceiptStatus,
    ReceivedTransaction,
    SaveResult,
    WorkReceipt,
)
from goldbook.domain.errors import (
    GENERIC_SAVE_FAILURE,
    NotFoundError,
    PersistenceError,
    ValidationError,
    balance_restore_failed,
    client_not_found,
    receipt_not_found,
)
from goldbook.domain.ledger import (
    compute_ledger,
    determine_status,
    recompute_receipt,
    round_receipt_for_storage,
)
from goldbook.domain.validation import validate_receipt_for_save
from goldbook.logging_config import get_logger
from goldbook.utils.numeric import round_for_storage

logger = get_logger(__name__)

VOUCHER_PREFIX = "GA"
VOUCHER_SEQUENCE_START = 1000


def _describe(error: Exception) -> str:
    return str(error) or GENERIC_SAVE_FAILURE


class ReceiptService:
    """Service for managing work receipts and saving them against client balances."""

    def __init__(self, db: Database):
        """Initialize receipt service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_client(self, client_id: int) -> Client:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def generate_voucher_id(self, on: Optional[date] = None) -> str:
        """Generate the next voucher ID for a month, e.g. GA-2404-1001."""
        on = on or date.today()
        prefix = f"{VOUCHER_PREFIX}-{on:%y%m}-"
        sequence = VOUCHER_SEQUENCE_START
        for voucher_id in self.db.list_voucher_ids_with_prefix(prefix):
            suffix = voucher_id[len(prefix):]
            if suffix.isdigit():
                sequence = max(sequence, int(suffix))
        return f"{prefix}{sequence + 1}"

    def create_receipt(
        self,
        client_id: int,
        kind: ReceiptKind = ReceiptKind.ADMIN_RECEIPT,
        given_date: Optional[date] = None,
        received_date: Optional[date] = None,
    ) -> int:
        """Create an empty receipt for a client.

        Args:
            client_id: Client ID
            kind: Receipt or admin receipt
            given_date: Date of the given side (defaults to today)
            received_date: Date of the received side (defaults to today)

        Returns:
            Receipt ID

        Raises:
            NotFoundError: If the client doesn't exist
        """
        self._require_client(client_id)
        today = date.today()
        receipt = WorkReceipt(
            client_id=client_id,
            kind=ReceiptKind(kind),
            voucher_id=self.generate_voucher_id(today),
            status=ReceiptStatus.EMPTY,
            given=GivenTransaction(date=given_date or today),
            received=ReceivedTransaction(date=received_date or today),
        )
        receipt_id = self.db.create_receipt(receipt)
        logger.info("Created receipt %s (%s) for client %s", receipt_id, receipt.voucher_id, client_id)
        return receipt_id

    def get_receipt(self, receipt_id: int) -> Optional[WorkReceipt]:
        """Get receipt by ID.

        Args:
            receipt_id: Receipt ID

        Returns:
            WorkReceipt or None if not found
        """
        return self.db.get_receipt(receipt_id)

    def require_receipt(self, receipt_id: int) -> WorkReceipt:
        """Get receipt by ID or raise NotFoundError."""
        receipt = self.db.get_receipt(receipt_id)
        if receipt is None:
            raise NotFoundError(receipt_not_found(receipt_id))
        return receipt

    def resolve_receipt(self, receipt: str | int) -> WorkReceipt:
        """Resolve a receipt ID or voucher ID to a receipt.

        Raises:
            NotFoundError: If no receipt matches
        """
        if isinstance(receipt, int):
            return self.require_receipt(receipt)

        try:
            receipt_id = int(receipt)
        except ValueError:
            receipt_id = None
        if receipt_id is not None:
            return self.require_receipt(receipt_id)

        for existing in self.db.list_receipts():
            if existing.voucher_id == receipt:
                return existing
        raise NotFoundError(f"Receipt '{receipt}' not found")

    def list_receipts(
        self, client_id: Optional[int] = None, kind: Optional[ReceiptKind] = None
    ) -> list[WorkReceipt]:
        """List receipts, newest first."""
        return self.db.list_receipts(client_id=client_id, kind=kind)

    def search_receipts(self, query: str) -> list[WorkReceipt]:
        """Find receipts by voucher ID, client name or shop name (case-insensitive).

        An empty query returns every receipt, newest first.
        """
        needle = query.strip().lower()
        receipts = self.db.list_receipts()
        if not needle:
            return receipts

        clients = {client.id: client for client in self.db.list_clients()}

        def matches(receipt: WorkReceipt) -> bool:
            if needle in receipt.voucher_id.lower():
                return True
            client = clients.get(receipt.client_id)
            if client is None:
                return False
            return needle in client.name.lower() or (
                client.shop_name is not None and needle in client.shop_name.lower()
            )

        return [receipt for receipt in receipts if matches(receipt)]

    def delete_receipt(self, receipt_id: int) -> None:
        """Delete a receipt and its items.

        The client balance is left as it is; a saved receipt's effect on the
        balance is not reversed.

        Raises:
            NotFoundError: If the receipt doesn't exist
        """
        receipt = self.require_receipt(receipt_id)
        self.db.delete_receipt(receipt_id)
        logger.info(
            "Deleted receipt %s (%s) of client %s", receipt_id, receipt.voucher_id, receipt.client_id
        )

    def update_draft(self, receipt: WorkReceipt) -> WorkReceipt:
        """Store an edited draft without validating it or touching the client balance.

        Returns:
            The recomputed receipt that was stored
        """
        if receipt.id is None:
            raise ValidationError("Receipt must be created before it can be updated")
        self.require_receipt(receipt.id)

        draft = recompute_receipt(receipt)
        draft = replace(draft, status=determine_status(draft))
        self.db.update_receipt(draft)
        return draft

    def preview(self, receipt: WorkReceipt) -> LedgerResult:
        """Compute the ledger for a receipt against its client's current balance."""
        client = self._require_client(receipt.client_id)
        return compute_ledger(receipt, client.balance)

    def save_receipt(self, receipt: WorkReceipt) -> SaveResult:
        """Validate a receipt and persist it together with the new client balance.

        The client balance is written first, then the receipt. If the receipt
        write fails, the previous balance is written back before the error is
        raised. The receipt passed in is never modified.

        Args:
            receipt: Edited receipt (must already exist in the store)

        Returns:
            SaveResult with the stored receipt and both balances

        Raises:
            ItemValidationError: If any item fails validation (nothing is written)
            NotFoundError: If the receipt or its client doesn't exist
            PersistenceError: If a store write fails
        """
        if receipt.id is None:
            raise ValidationError("Receipt must be created before it can be saved")
        validate_receipt_for_save(receipt)
        self.require_receipt(receipt.id)
        client = self._require_client(receipt.client_id)

        previous_balance = client.balance
        result = compute_ledger(receipt, previous_balance)
        stored = round_receipt_for_storage(
            replace(result.receipt, manual_calculations=result.reconciliation)
        )
        new_balance = round_for_storage(result.new_client_balance)

        try:
            self.db.update_client_balance(client.id, new_balance)
        except Exception as e:
            logger.error("Updating balance of client %s failed: %s", client.id, e)
            raise PersistenceError(_describe(e)) from e
        logger.info(
            "Client %s balance %s -> %s (receipt %s)",
            client.id,
            previous_balance,
            new_balance,
            stored.voucher_id,
        )

        try:
            self.db.update_receipt(stored)
        except Exception as e:
            message = _describe(e)
            logger.error("Updating receipt %s failed after balance write: %s", stored.id, message)
            self._restore_balance(client.id, previous_balance, message)
            raise PersistenceError(message) from e

        return SaveResult(
            receipt=stored,
            previous_balance=previous_balance,
            new_client_balance=new_balance,
        )

    def _restore_balance(self, client_id: int, balance, message: str) -> None:
        try:
            self.db.update_client_balance(client_id, balance)
        except Exception as e:
            logger.critical("Could not restore balance of client %s to %s: %s", client_id, balance, e)
            raise PersistenceError(balance_restore_failed(message)) from e
        logger.warning("Restored balance of client %s to %s", client_id, balance)
