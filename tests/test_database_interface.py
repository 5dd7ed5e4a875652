"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from goldbook.domain import entities
from goldbook.domain.errors import NotFoundError


def stored_receipt(client_id: int, voucher_id: str = "GA-2404-1001", **overrides) -> entities.WorkReceipt:
    values = dict(
        client_id=client_id,
        kind=entities.ReceiptKind.RECEIPT,
        voucher_id=voucher_id,
        given=entities.GivenTransaction(date=date(2024, 4, 1)),
        received=entities.ReceivedTransaction(date=date(2024, 4, 2)),
    )
    values.update(overrides)
    return entities.WorkReceipt(**values)


class TestClientStore:
    """Tests for client operations."""

    def test_get_client_returns_domain_model(self, temp_db):
        """Test that get_client returns a domain Client entity."""
        client_id = temp_db.create_client(name="Ravi", shop_name="Golden Creations", balance=Decimal("10.00"))

        client = temp_db.get_client(client_id)

        assert isinstance(client, entities.Client)
        assert client.id == client_id
        assert client.name == "Ravi"
        assert client.shop_name == "Golden Creations"
        assert client.balance == Decimal("10")
        assert isinstance(client.balance, Decimal)
        assert isinstance(client.created_at, datetime)

    def test_get_missing_client(self, temp_db):
        """Test that a missing client is None."""
        assert temp_db.get_client(999) is None

    def test_list_clients_ordered_by_name(self, temp_db):
        """Test that list_clients returns clients sorted by name."""
        temp_db.create_client(name="Zara")
        temp_db.create_client(name="Anil")

        clients = temp_db.list_clients()

        assert [c.name for c in clients] == ["Anil", "Zara"]
        assert all(isinstance(c, entities.Client) for c in clients)

    def test_update_client_keeps_unset_fields(self, temp_db):
        """Test that None leaves a field unchanged."""
        client_id = temp_db.create_client(name="Ravi", shop_name="Old Shop", email="ravi@example.com")

        temp_db.update_client(client_id, shop_name="New Shop")

        client = temp_db.get_client(client_id)
        assert client.shop_name == "New Shop"
        assert client.email == "ravi@example.com"

    def test_update_client_balance(self, temp_db):
        """Test overwriting the balance."""
        client_id = temp_db.create_client(name="Ravi")
        temp_db.update_client_balance(client_id, Decimal("-12.35"))
        assert temp_db.get_client(client_id).balance == Decimal("-12.35")

    def test_update_missing_client_raises(self, temp_db):
        """Test writes against a missing client."""
        with pytest.raises(NotFoundError):
            temp_db.update_client_balance(999, Decimal("1"))
        with pytest.raises(NotFoundError):
            temp_db.delete_client(999)

    def test_delete_client(self, temp_db):
        """Test deleting a client."""
        client_id = temp_db.create_client(name="Ravi")
        temp_db.delete_client(client_id)
        assert temp_db.get_client(client_id) is None


class TestReceiptStore:
    """Tests for receipt operations."""

    def test_create_and_get_receipt(self, temp_db):
        """Test that get_receipt returns a domain WorkReceipt."""
        client_id = temp_db.create_client(name="Ravi")
        receipt_id = temp_db.create_receipt(stored_receipt(client_id))

        receipt = temp_db.get_receipt(receipt_id)

        assert isinstance(receipt, entities.WorkReceipt)
        assert receipt.id == receipt_id
        assert receipt.client_id == client_id
        assert receipt.kind is entities.ReceiptKind.RECEIPT
        assert receipt.status is entities.ReceiptStatus.EMPTY
        assert receipt.voucher_id == "GA-2404-1001"
        assert receipt.given.date == date(2024, 4, 1)
        assert receipt.received.date == date(2024, 4, 2)
        assert receipt.given.items == ()
        assert isinstance(receipt.created_at, datetime)
        assert temp_db.get_client_receipt_count(client_id) == 1

    def test_update_receipt_replaces_items(self, temp_db):
        """Test that update_receipt rewrites items in order."""
        client_id = temp_db.create_client(name="Ravi")
        receipt_id = temp_db.create_receipt(stored_receipt(client_id))
        receipt = temp_db.get_receipt(receipt_id)

        given = entities.GivenTransaction(
            date=date(2024, 4, 1),
            items=(
                entities.GivenItem(product_name="Bar", pure_weight=Decimal("10"), pure_percent=Decimal("50"), total=Decimal("500")),
                entities.GivenItem(product_name="Coin", pure_weight=Decimal("1.5"), pure_percent=Decimal("99.9"), melting=Decimal("2")),
            ),
            total=Decimal("500"),
        )
        temp_db.update_receipt(
            entities.WorkReceipt(
                id=receipt.id,
                client_id=client_id,
                kind=receipt.kind,
                voucher_id=receipt.voucher_id,
                status=entities.ReceiptStatus.INCOMPLETE,
                given=given,
            )
        )

        updated = temp_db.get_receipt(receipt_id)
        assert updated.status is entities.ReceiptStatus.INCOMPLETE
        assert [item.product_name for item in updated.given.items] == ["Bar", "Coin"]
        assert updated.given.items[1].melting == Decimal("2")
        assert updated.given.items[1].pure_weight == Decimal("1.5")
        assert updated.given.total == Decimal("500")

        # Fewer items on the next update removes the rest
        temp_db.update_receipt(entities.WorkReceipt(id=receipt.id, client_id=client_id, voucher_id=receipt.voucher_id))
        assert temp_db.get_receipt(receipt_id).given.items == ()

    def test_update_missing_receipt_raises(self, temp_db):
        """Test updating a receipt that was never stored."""
        client_id = temp_db.create_client(name="Ravi")
        with pytest.raises(NotFoundError):
            temp_db.update_receipt(stored_receipt(client_id, id=42))

    def test_list_receipts_filters(self, temp_db):
        """Test filtering receipts by client and kind."""
        ravi = temp_db.create_client(name="Ravi")
        anil = temp_db.create_client(name="Anil")
        temp_db.create_receipt(stored_receipt(ravi, "GA-2404-1001"))
        temp_db.create_receipt(stored_receipt(ravi, "GA-2404-1002", kind=entities.ReceiptKind.ADMIN_RECEIPT))
        temp_db.create_receipt(stored_receipt(anil, "GA-2404-1003"))

        assert len(temp_db.list_receipts()) == 3
        assert {r.voucher_id for r in temp_db.list_receipts(client_id=ravi)} == {"GA-2404-1001", "GA-2404-1002"}
        admin = temp_db.list_receipts(kind=entities.ReceiptKind.ADMIN_RECEIPT)
        assert [r.voucher_id for r in admin] == ["GA-2404-1002"]

    def test_list_voucher_ids_with_prefix(self, temp_db):
        """Test listing the voucher IDs of one month."""
        client_id = temp_db.create_client(name="Ravi")
        temp_db.create_receipt(stored_receipt(client_id, "GA-2404-1001"))
        temp_db.create_receipt(stored_receipt(client_id, "GA-2404-1002"))
        temp_db.create_receipt(stored_receipt(client_id, "GA-2405-1001"))

        assert sorted(temp_db.list_voucher_ids_with_prefix("GA-2404-")) == ["GA-2404-1001", "GA-2404-1002"]
        assert temp_db.list_voucher_ids_with_prefix("GA-2405-") == ["GA-2405-1001"]
        assert temp_db.list_voucher_ids_with_prefix("GA-2406-") == []

    def test_voucher_prefix_is_not_a_pattern(self, temp_db):
        """Test that LIKE wildcards in the prefix match literally."""
        client_id = temp_db.create_client(name="Ravi")
        temp_db.create_receipt(stored_receipt(client_id, "GA-2404-1001"))

        assert temp_db.list_voucher_ids_with_prefix("GA-24_4-") == []
        assert temp_db.list_voucher_ids_with_prefix("GA-%") == []

    def test_delete_receipt(self, temp_db):
        """Test deleting a receipt together with its items."""
        client_id = temp_db.create_client(name="Ravi")
        receipt_id = temp_db.create_receipt(stored_receipt(client_id))
        given = entities.GivenTransaction(
            date=date(2024, 4, 1),
            items=(entities.GivenItem(product_name="Bar", pure_weight=Decimal("10"), pure_percent=Decimal("50")),),
        )
        temp_db.update_receipt(stored_receipt(client_id, id=receipt_id, given=given))
        other_id = temp_db.create_receipt(stored_receipt(client_id, "GA-2404-1002"))

        temp_db.delete_receipt(receipt_id)

        assert temp_db.get_receipt(receipt_id) is None
        assert [r.id for r in temp_db.list_receipts()] == [other_id]
        assert temp_db.get_client_receipt_count(client_id) == 1

    def test_delete_missing_receipt(self, temp_db):
        """Test deleting a receipt that does not exist."""
        with pytest.raises(NotFoundError, match="Receipt 42 not found"):
            temp_db.delete_receipt(42)


class TestItemPrecision:
    """Tests that item inputs are stored without rounding."""

    def test_inputs_round_trip_exactly(self, temp_db):
        """Test that weights, percents and melting keep all their digits."""
        client_id = temp_db.create_client(name="Ravi")
        receipt_id = temp_db.create_receipt(stored_receipt(client_id))
        receipt = temp_db.get_receipt(receipt_id)

        temp_db.update_receipt(
            entities.WorkReceipt(
                id=receipt.id,
                client_id=client_id,
                voucher_id=receipt.voucher_id,
                given=entities.GivenTransaction(
                    items=(
                        entities.GivenItem(
                            product_name="Bar",
                            pure_weight=Decimal("10.1234"),
                            pure_percent=Decimal("91.66666"),
                            melting=Decimal("91.6666"),
                        ),
                    ),
                ),
                received=entities.ReceivedTransaction(
                    items=(
                        entities.ReceivedItem(
                            product_name="Ring",
                            final_ornaments_wt=Decimal("12.34567"),
                            stone_weight=Decimal("0.0005"),
                            making_charge_percent=Decimal("7.125"),
                        ),
                    ),
                ),
            )
        )

        reloaded = temp_db.get_receipt(receipt_id)
        given = reloaded.given.items[0]
        received = reloaded.received.items[0]
        assert given.pure_weight == Decimal("10.1234")
        assert given.pure_percent == Decimal("91.66666")
        assert given.melting == Decimal("91.6666")
        assert received.final_ornaments_wt == Decimal("12.34567")
        assert received.stone_weight == Decimal("0.0005")
        assert received.making_charge_percent == Decimal("7.125")
        assert isinstance(given.pure_weight, Decimal)
