"""Receipt commands: create, edit items, preview and save."""

import click
from goldbook.cli.display import amount, render_receipt
from goldbook.cli.error_handling import handle_domain_error
from goldbook.domain import ledger
from goldbook.domain.client import ClientService
from goldbook.domain.entities import BalanceOperation, ReceiptKind, Side
from goldbook.domain.errors import DomainError
from goldbook.domain.receipt import ReceiptService
from goldbook.utils.date_parser import parse_date

KIND_CHOICES = [kind.value for kind in ReceiptKind]
SIDE_CHOICES = [side.value for side in Side]
OPERATION_CHOICES = [op.value for op in BalanceOperation]


def _parse_optional_date(ctx: click.Context, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _store_draft(ctx: click.Context, service: ReceiptService, receipt) -> None:
    try:
        stored = service.update_draft(receipt)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Given total: {amount(stored.given.total)} | Received total: {amount(stored.received.total)}"
    )


def _echo_receipts(receipts, client_service: ClientService) -> None:
    names = {c.id: c.name for c in client_service.list_clients()}
    click.echo("\nReceipts:")
    click.echo("-" * 88)
    for r in receipts:
        click.echo(
            f"ID: {r.id:3d} | {r.voucher_id:14s} | {names.get(r.client_id, '?'):16s} | "
            f"{r.status.value:10s} | Given: {amount(r.given.total):>9} | Received: {amount(r.received.total):>9}"
        )


@click.group()
def receipt_group():
    """Manage work receipts."""
    pass


@receipt_group.command("create")
@click.option("--client", "client_ref", required=True, help="Client name or ID")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES),
    default=ReceiptKind.ADMIN_RECEIPT.value,
    show_default=True,
    help="Receipt kind",
)
@click.option("--given-date", help="Date of the given side (default today)")
@click.option("--received-date", help="Date of the received side (default today)")
@click.pass_context
def create_receipt(ctx, client_ref: str, kind: str, given_date: str | None, received_date: str | None):
    """Create an empty receipt for a client.

    Examples:
        goldbook receipt create --client "Ravi"
        goldbook receipt create --client 1 --kind receipt --given-date 2024-04-01
    """
    db = ctx.obj["db"]
    client_service = ClientService(db)
    service = ReceiptService(db)

    given = _parse_optional_date(ctx, given_date, "given date")
    received = _parse_optional_date(ctx, received_date, "received date")

    try:
        client_obj = client_service.resolve_client(client_ref)
        receipt_id = service.create_receipt(
            client_obj.id, kind=ReceiptKind(kind), given_date=given, received_date=received
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    receipt = service.require_receipt(receipt_id)
    click.echo(f"Created receipt {receipt.voucher_id} (ID: {receipt_id}) for '{client_obj.name}'")


@receipt_group.command("list")
@click.option("--client", "client_ref", help="Client name or ID")
@click.option("--kind", type=click.Choice(KIND_CHOICES), help="Receipt kind")
@click.pass_context
def list_receipts(ctx, client_ref: str | None, kind: str | None):
    """List receipts, newest first."""
    db = ctx.obj["db"]
    client_service = ClientService(db)
    service = ReceiptService(db)

    client_id = None
    if client_ref is not None:
        try:
            client_id = client_service.resolve_client(client_ref).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    receipts = service.list_receipts(
        client_id=client_id, kind=ReceiptKind(kind) if kind else None
    )
    if not receipts:
        click.echo("No receipts found.")
        return

    _echo_receipts(receipts, client_service)


@receipt_group.command("search")
@click.argument("query")
@click.pass_context
def search_receipts(ctx, query: str):
    """Search receipts by voucher ID, client name or shop name.

    Example:
        goldbook receipt search ravi
    """
    db = ctx.obj["db"]
    receipts = ReceiptService(db).search_receipts(query)
    if not receipts:
        click.echo(f"No receipts matching '{query}'.")
        return
    _echo_receipts(receipts, ClientService(db))


@receipt_group.command("show")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.pass_context
def show_receipt(ctx, receipt_ref: str):
    """Show a receipt with totals and the projected client balance.

    RECEIPT can be a receipt ID or voucher ID.
    """
    db = ctx.obj["db"]
    service = ReceiptService(db)
    client_service = ClientService(db)

    try:
        receipt = service.resolve_receipt(receipt_ref)
        client_obj = client_service.require_client(receipt.client_id)
        result = service.preview(receipt)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(render_receipt(result, client_obj, client_obj.balance))


@receipt_group.command("add-given")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.option("--product", required=True, help="Product name")
@click.option("--pure-weight", default="0", help="Pure weight in grams")
@click.option("--pure-percent", default="0", help="Purity percentage (0-100)")
@click.option("--melting", default="1", help="Melting (touch) divisor")
@click.option("--date", "item_date", help="Item date (default: the given date)")
@click.pass_context
def add_given(
    ctx,
    receipt_ref: str,
    product: str,
    pure_weight: str,
    pure_percent: str,
    melting: str,
    item_date: str | None,
):
    """Add a given item to a receipt.

    Example:
        goldbook receipt add-given 1 --product "Gold Bar" --pure-weight 100 --pure-percent 99.5 --melting 92.5
    """
    service = ReceiptService(ctx.obj["db"])
    parsed_date = _parse_optional_date(ctx, item_date, "date")

    try:
        receipt = service.resolve_receipt(receipt_ref)
        receipt = ledger.add_item(
            receipt,
            Side.GIVEN,
            parsed_date,
            product_name=product,
            pure_weight=pure_weight,
            pure_percent=pure_percent,
            melting=melting,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    item = receipt.given.items[-1]
    click.echo(f"Added given item {len(receipt.given.items)}: {item.product_name} (total {amount(item.total)})")
    _store_draft(ctx, service, receipt)


@receipt_group.command("add-received")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.option("--product", required=True, help="Product name")
@click.option("--ornaments-wt", default="0", help="Final ornaments weight in grams")
@click.option("--stone-weight", default="0", help="Stone weight in grams")
@click.option("--making-charge", default="0", help="Making charge percentage")
@click.option("--date", "item_date", help="Item date (default: the received date)")
@click.pass_context
def add_received(
    ctx,
    receipt_ref: str,
    product: str,
    ornaments_wt: str,
    stone_weight: str,
    making_charge: str,
    item_date: str | None,
):
    """Add a received item to a receipt.

    Example:
        goldbook receipt add-received 1 --product "Ring" --ornaments-wt 50 --stone-weight 5 --making-charge 10
    """
    service = ReceiptService(ctx.obj["db"])
    parsed_date = _parse_optional_date(ctx, item_date, "date")

    try:
        receipt = service.resolve_receipt(receipt_ref)
        receipt = ledger.add_item(
            receipt,
            Side.RECEIVED,
            parsed_date,
            product_name=product,
            final_ornaments_wt=ornaments_wt,
            stone_weight=stone_weight,
            making_charge_percent=making_charge,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    item = receipt.received.items[-1]
    click.echo(
        f"Added received item {len(receipt.received.items)}: {item.product_name} "
        f"(sub total {amount(item.sub_total)}, total {amount(item.total)})"
    )
    _store_draft(ctx, service, receipt)


@receipt_group.command("edit-item")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.argument("side", type=click.Choice(SIDE_CHOICES))
@click.argument("number", type=int)
@click.argument("field")
@click.argument("value")
@click.pass_context
def edit_item(ctx, receipt_ref: str, side: str, number: int, field: str, value: str):
    """Change one field of an item.

    NUMBER is the item number shown by 'receipt show' (starting at 1).
    FIELD is e.g. product-name, pure-weight, pure-percent, melting, date,
    final-ornaments-wt, stone-weight or making-charge-percent.

    Example:
        goldbook receipt edit-item 1 given 1 melting 91.6
    """
    service = ReceiptService(ctx.obj["db"])

    try:
        receipt = service.resolve_receipt(receipt_ref)
        receipt = ledger.apply_item_change(
            receipt, side, number - 1, field.replace("-", "_"), value
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated {side} item {number}: {field} = {value}")
    _store_draft(ctx, service, receipt)


@receipt_group.command("remove-item")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.argument("side", type=click.Choice(SIDE_CHOICES))
@click.argument("number", type=int)
@click.pass_context
def remove_item(ctx, receipt_ref: str, side: str, number: int):
    """Remove an item (NUMBER starts at 1)."""
    service = ReceiptService(ctx.obj["db"])

    try:
        receipt = service.resolve_receipt(receipt_ref)
        receipt = ledger.remove_item(receipt, side, number - 1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Removed {side} item {number}")
    _store_draft(ctx, service, receipt)


@receipt_group.command("set-operation")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.argument("operation", type=click.Choice(OPERATION_CHOICES))
@click.pass_context
def set_operation(ctx, receipt_ref: str, operation: str):
    """Choose the manual calculation shown in the balance summary."""
    service = ReceiptService(ctx.obj["db"])

    try:
        receipt = service.resolve_receipt(receipt_ref)
        receipt = ledger.set_operation(receipt, operation)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Manual calculation set to '{operation}'")
    _store_draft(ctx, service, receipt)


@receipt_group.command("save")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.pass_context
def save_receipt(ctx, receipt_ref: str):
    """Validate a receipt and apply it to the client balance.

    The new balance is (given total - received total) + current balance.
    """
    service = ReceiptService(ctx.obj["db"])

    try:
        receipt = service.resolve_receipt(receipt_ref)
        result = service.save_receipt(receipt)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Receipt {result.receipt.voucher_id} saved ({result.receipt.status.value}). "
        f"New client balance: {amount(result.new_client_balance)}"
    )



@receipt_group.command("delete")
@click.argument("receipt_ref", metavar="RECEIPT")
@click.option("--yes", is_flag=True, help="Delete without confirmation")
@click.pass_context
def delete_receipt(ctx, receipt_ref: str, yes: bool):
    """Delete a receipt and its items.

    The client balance is not changed, even for a saved receipt.
    """
    service = ReceiptService(ctx.obj["db"])

    try:
        receipt = service.resolve_receipt(receipt_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete receipt {receipt.voucher_id} (ID: {receipt.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_receipt(receipt.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted receipt {receipt.voucher_id}")

def register_commands(cli):
    """Register receipt commands with main CLI."""
    cli.add_command(receipt_group, name="receipt")
