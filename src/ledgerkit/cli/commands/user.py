"""User management commands."""

import click

from ledgerkit.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerkit.domain.entities import CURRENCIES, DEFAULT_CURRENCY
from ledgerkit.domain.errors import DomainError, StorageError
from ledgerkit.domain.user import UserService
from ledgerkit.utils.amount_parser import format_amount


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("username", metavar="USERNAME")
@click.option("--full-name", required=True, help="Full name")
@click.option("--email", required=True, help="Email address")
@click.option(
    "--currency",
    type=click.Choice(CURRENCIES),
    default=DEFAULT_CURRENCY,
    show_default=True,
    help="Currency of the opening account",
)
@click.pass_context
def create_user(ctx, username: str, full_name: str, email: str, currency: str):
    """Create a user with an empty opening account.

    Examples:
        ledgerkit user create alice --full-name "Alice Doe" --email alice@example.com
        ledgerkit user create bob --full-name "Bob" --email bob@example.com --currency GBP
    """
    service = UserService(ctx.obj["db"])

    try:
        user, account = service.register(
            username=username, full_name=full_name, email=email, currency=currency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Created user '{user.username}' (ID: {user.id})")
    click.echo(f"Opened {account.currency} account {account.id} with balance {format_amount(account.balance)}")


@user_group.command("show")
@click.argument("user_id", metavar="USER_ID")
@click.pass_context
def show_user(ctx, user_id: str):
    """Show a user."""
    service = UserService(ctx.obj["db"])

    try:
        user = service.get_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"ID:        {user.id}")
    click.echo(f"Username:  {user.username}")
    click.echo(f"Full name: {user.full_name}")
    click.echo(f"Email:     {user.email}")


@user_group.command("seed")
@click.pass_context
def seed_users(ctx):
    """Create the predefined users user1, user2 and user3.

    Users that already exist are left alone.
    """
    service = UserService(ctx.obj["db"])

    try:
        created = service.seed_default_users()
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    if not created:
        click.echo("Default users already exist.")
        return
    for user in created:
        click.echo(f"Created user '{user.username}' (ID: {user.id})")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
