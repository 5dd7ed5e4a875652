"""Plain-text rendering of receipts for the CLI."""

from decimal import Decimal
from typing import Optional

from goldbook.domain.entities import Client, LedgerResult, WorkReceipt
from goldbook.utils.numeric import format_numeric_value


def weight(value: Decimal) -> str:
    """Format an input weight or percentage (three decimals)."""
    return format_numeric_value(value, 3)


def amount(value: Decimal) -> str:
    """Format a derived total (two decimals)."""
    return format_numeric_value(value, 2)


def receipt_header(receipt: WorkReceipt, client: Optional[Client] = None) -> list[str]:
    """Return the heading lines of a receipt."""
    lines = [
        f"Receipt {receipt.voucher_id} (ID: {receipt.id}) | {receipt.kind.value} | status: {receipt.status.value}"
    ]
    if client is not None:
        shop = f" - {client.shop_name}" if client.shop_name else ""
        lines.append(f"Client: {client.name}{shop} (ID: {client.id})")
    return lines


def given_lines(receipt: WorkReceipt) -> list[str]:
    """Return the table of given items with totals."""
    given = receipt.given
    lines = [f"Given ({given.date or '-'})"]
    if not given.items:
        lines.append("  No given items.")
    else:
        lines.append(
            f"  {'#':>3}  {'Product':20s} {'Pure Wt':>10} {'Pure %':>8} {'Melting':>8} {'Total':>10}"
        )
        for number, item in enumerate(given.items, start=1):
            lines.append(
                f"  {number:>3}  {item.product_name[:20]:20s} {weight(item.pure_weight):>10} "
                f"{weight(item.pure_percent):>8} {weight(item.melting):>8} {amount(item.total):>10}"
            )
    lines.append(
        f"  Total: {amount(given.total)} | Total pure weight: {amount(given.total_pure_weight)}"
    )
    return lines


def received_lines(receipt: WorkReceipt) -> list[str]:
    """Return the table of received items with totals."""
    received = receipt.received
    lines = [f"Received ({received.date or '-'})"]
    if not received.items:
        lines.append("  No received items.")
    else:
        lines.append(
            f"  {'#':>3}  {'Product':20s} {'Ornaments':>10} {'Stone':>8} {'Making %':>8} "
            f"{'Sub Total':>10} {'Total':>10}"
        )
        for number, item in enumerate(received.items, start=1):
            lines.append(
                f"  {number:>3}  {item.product_name[:20]:20s} {weight(item.final_ornaments_wt):>10} "
                f"{weight(item.stone_weight):>8} {weight(item.making_charge_percent):>8} "
                f"{amount(item.sub_total):>10} {amount(item.total):>10}"
            )
    lines.append(
        f"  Total: {amount(received.total)} | Ornaments: {amount(received.total_ornaments_wt)} "
        f"| Stone: {amount(received.total_stone_weight)} | Sub total: {amount(received.total_sub_total)}"
    )
    return lines


def balance_lines(result: LedgerResult, current_balance: Decimal) -> list[str]:
    """Return the balance summary lines."""
    reconciliation = result.reconciliation
    return [
        "Balance Summary",
        f"  Given total: {amount(reconciliation.given_total)}",
        f"  Received total: {amount(reconciliation.received_total)}",
        f"  Manual calculation ({reconciliation.operation}): {amount(reconciliation.result)}",
        f"  Current client balance (g): {amount(current_balance)}",
        f"  New client balance (g): {amount(result.new_client_balance)}",
    ]


def render_receipt(
    result: LedgerResult, client: Optional[Client], current_balance: Decimal
) -> str:
    """Render a full receipt preview."""
    sections = [
        receipt_header(result.receipt, client),
        given_lines(result.receipt),
        received_lines(result.receipt),
        balance_lines(result, current_balance),
    ]
    return "\n\n".join("\n".join(section) for section in sections)
