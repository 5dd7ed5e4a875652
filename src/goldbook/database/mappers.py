"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: the receipt is nested in the
domain (two transactions with items) but flattened into one row plus item
rows in the schema.
"""

from decimal import Decimal
from typing import Optional

from goldbook.domain import entities as domain
from goldbook.database.models import (
    Client as ORMClient,
    Receipt as ORMReceipt,
    GivenItem as ORMGivenItem,
    ReceivedItem as ORMReceivedItem,
)


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        shop_name=orm_client.shop_name,
        phone_number=orm_client.phone_number,
        address=orm_client.address,
        email=orm_client.email,
        balance=_decimal(orm_client.balance),
        created_at=orm_client.created_at,
    )


def given_item_to_domain(orm_item: ORMGivenItem) -> domain.GivenItem:
    """Convert SQLAlchemy GivenItem row to domain GivenItem."""
    return domain.GivenItem(
        id=orm_item.id,
        product_name=orm_item.product_name,
        pure_weight=_decimal(orm_item.pure_weight),
        pure_percent=_decimal(orm_item.pure_percent),
        melting=_decimal(orm_item.melting),
        total=_decimal(orm_item.total),
        date=orm_item.date,
    )


def received_item_to_domain(orm_item: ORMReceivedItem) -> domain.ReceivedItem:
    """Convert SQLAlchemy ReceivedItem row to domain ReceivedItem."""
    return domain.ReceivedItem(
        id=orm_item.id,
        product_name=orm_item.product_name,
        final_ornaments_wt=_decimal(orm_item.final_ornaments_wt),
        stone_weight=_decimal(orm_item.stone_weight),
        making_charge_percent=_decimal(orm_item.making_charge_percent),
        sub_total=_decimal(orm_item.sub_total),
        total=_decimal(orm_item.total),
        date=orm_item.date,
    )


def _manual_to_domain(orm_receipt: ORMReceipt) -> Optional[domain.ManualReconciliation]:
    if orm_receipt.manual_operation is None:
        return None
    return domain.ManualReconciliation(
        given_total=_decimal(orm_receipt.manual_given_total),
        received_total=_decimal(orm_receipt.manual_received_total),
        operation=orm_receipt.manual_operation,
        result=_decimal(orm_receipt.manual_result),
    )


def receipt_to_domain(orm_receipt: ORMReceipt) -> domain.WorkReceipt:
    """Convert SQLAlchemy Receipt model (with item rows) to domain WorkReceipt."""
    given = domain.GivenTransaction(
        date=orm_receipt.given_date,
        items=tuple(given_item_to_domain(item) for item in orm_receipt.given_items),
        total=_decimal(orm_receipt.given_total),
        total_pure_weight=_decimal(orm_receipt.given_total_pure_weight),
    )
    received = domain.ReceivedTransaction(
        date=orm_receipt.received_date,
        items=tuple(received_item_to_domain(item) for item in orm_receipt.received_items),
        total=_decimal(orm_receipt.received_total),
        total_ornaments_wt=_decimal(orm_receipt.received_total_ornaments_wt),
        total_stone_weight=_decimal(orm_receipt.received_total_stone_weight),
        total_sub_total=_decimal(orm_receipt.received_total_sub_total),
    )
    return domain.WorkReceipt(
        id=orm_receipt.id,
        kind=domain.ReceiptKind(orm_receipt.kind),
        client_id=orm_receipt.client_id,
        voucher_id=orm_receipt.voucher_id,
        status=domain.ReceiptStatus(orm_receipt.status),
        given=given,
        received=received,
        operation=orm_receipt.operation,
        manual_calculations=_manual_to_domain(orm_receipt),
        created_at=orm_receipt.created_at,
        updated_at=orm_receipt.updated_at,
    )


def apply_receipt_to_orm(receipt: domain.WorkReceipt, orm_receipt: ORMReceipt) -> ORMReceipt:
    """Copy a domain WorkReceipt onto a SQLAlchemy Receipt, replacing its items."""
    orm_receipt.kind = domain.ReceiptKind(receipt.kind).value
    orm_receipt.client_id = receipt.client_id
    orm_receipt.voucher_id = receipt.voucher_id
    orm_receipt.status = domain.ReceiptStatus(receipt.status).value
    orm_receipt.operation = str(receipt.operation)

    orm_receipt.given_date = receipt.given.date
    orm_receipt.given_total = receipt.given.total
    orm_receipt.given_total_pure_weight = receipt.given.total_pure_weight

    orm_receipt.received_date = receipt.received.date
    orm_receipt.received_total = receipt.received.total
    orm_receipt.received_total_ornaments_wt = receipt.received.total_ornaments_wt
    orm_receipt.received_total_stone_weight = receipt.received.total_stone_weight
    orm_receipt.received_total_sub_total = receipt.received.total_sub_total

    manual = receipt.manual_calculations
    orm_receipt.manual_given_total = manual.given_total if manual else None
    orm_receipt.manual_received_total = manual.received_total if manual else None
    orm_receipt.manual_operation = manual.operation if manual else None
    orm_receipt.manual_result = manual.result if manual else None

    orm_receipt.given_items = [
        ORMGivenItem(
            position=position,
            product_name=item.product_name,
            pure_weight=item.pure_weight,
            pure_percent=item.pure_percent,
            melting=item.melting,
            total=item.total,
            date=item.date,
        )
        for position, item in enumerate(receipt.given.items)
    ]
    orm_receipt.received_items = [
        ORMReceivedItem(
            position=position,
            product_name=item.product_name,
            final_ornaments_wt=item.final_ornaments_wt,
            stone_weight=item.stone_weight,
            making_charge_percent=item.making_charge_percent,
            sub_total=item.sub_total,
            total=item.total,
            date=item.date,
        )
        for position, item in enumerate(receipt.received.items)
    ]
    return orm_receipt
