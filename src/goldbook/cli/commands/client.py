"""Client management commands."""

import click
from goldbook.cli.display import amount
from goldbook.cli.error_handling import handle_domain_error
from goldbook.domain.client import ClientService
from goldbook.domain.errors import DomainError


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--shop", help="Shop name")
@click.option("--phone", help="Phone number")
@click.option("--address", help="Address")
@click.option("--email", help="Email address")
@click.option("--balance", default="0", help="Opening balance in grams (default 0)")
@click.pass_context
def create_client(
    ctx,
    name: str,
    shop: str | None,
    phone: str | None,
    address: str | None,
    email: str | None,
    balance: str,
):
    """Create a new client.

    Examples:
        goldbook client create "Ravi"
        goldbook client create "Ravi" --shop "Golden Creations" --balance 12.5
    """
    service = ClientService(ctx.obj["db"])

    try:
        client_id = service.create_client(
            name=name,
            shop_name=shop,
            phone_number=phone,
            address=address,
            email=email,
            balance=balance,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    client_obj = service.get_client(client_id)
    click.echo(f"Created client '{client_obj.name}' (ID: {client_id})")
    click.echo(f"Opening balance (g): {amount(client_obj.balance)}")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    service = ClientService(ctx.obj["db"])

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    _echo_clients(clients)


@client_group.command("search")
@click.argument("query")
@click.pass_context
def search_clients(ctx, query: str):
    """Search clients by name or shop name."""
    service = ClientService(ctx.obj["db"])

    clients = service.search_clients(query)
    if not clients:
        click.echo(f"No clients matching '{query}'.")
        return

    _echo_clients(clients)


def _echo_clients(clients) -> None:
    click.echo("\nClients:")
    click.echo("-" * 72)
    for c in clients:
        shop = c.shop_name or ""
        click.echo(f"ID: {c.id:3d} | {c.name:20s} | {shop:20s} | Balance (g): {amount(c.balance):>10}")


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show client details.

    CLIENT can be a client name or ID.
    """
    service = ClientService(ctx.obj["db"])

    try:
        client_obj = service.resolve_client(client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Client: {client_obj.name} (ID: {client_obj.id})")
    if client_obj.shop_name:
        click.echo(f"  Shop: {client_obj.shop_name}")
    if client_obj.phone_number:
        click.echo(f"  Phone: {client_obj.phone_number}")
    if client_obj.address:
        click.echo(f"  Address: {client_obj.address}")
    if client_obj.email:
        click.echo(f"  Email: {client_obj.email}")
    click.echo(f"  Balance (g): {amount(client_obj.balance)}")


@client_group.command("edit")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New client name")
@click.option("--shop", help="New shop name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.option("--email", help="New email address")
@click.pass_context
def edit_client(
    ctx,
    client: str,
    name: str | None,
    shop: str | None,
    phone: str | None,
    address: str | None,
    email: str | None,
):
    """Edit client contact details.

    The balance is only changed by saving receipts.
    """
    service = ClientService(ctx.obj["db"])

    try:
        client_obj = service.resolve_client(client)
        service.update_client(
            client_obj.id,
            name=name,
            shop_name=shop,
            phone_number=phone,
            address=address,
            email=email,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client {client_obj.id}")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Delete without confirmation")
@click.pass_context
def delete_client(ctx, client: str, yes: bool):
    """Delete a client.

    A client can only be deleted when no receipts reference it.
    """
    service = ClientService(ctx.obj["db"])

    try:
        client_obj = service.resolve_client(client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client '{client_obj.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
