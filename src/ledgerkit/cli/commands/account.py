"""Account and balance commands."""

import click

from ledgerkit.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import CURRENCIES, DEFAULT_CURRENCY
from ledgerkit.domain.errors import DomainError, StorageError
from ledgerkit.utils.amount_parser import format_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("user_id", metavar="USER_ID")
@click.option(
    "--currency",
    type=click.Choice(CURRENCIES),
    default=DEFAULT_CURRENCY,
    show_default=True,
    help="Account currency",
)
@click.pass_context
def create_account(ctx, user_id: str, currency: str):
    """Open a zero-balance account for a user.

    A user can hold one account per currency.

    Examples:
        ledgerkit account create 1 --currency USD
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.open_account(user_id=user_id, currency=currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Created {account.currency} account (ID: {account.id}) for user {account.user_id}")


@account_group.command("list")
@click.option("--user", "user_id", help="Only accounts of this user ID")
@click.pass_context
def list_accounts(ctx, user_id: str | None):
    """List accounts."""
    service = AccountService(ctx.obj["db"])

    try:
        accounts = service.list_accounts(user_id=user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | User: {acc.user_id:3d} | {acc.currency} "
            f"{acc.balance:>14,.2f} | {acc.status}"
        )


@account_group.command("show")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.pass_context
def show_account(ctx, account_id: str):
    """Show an account and its balance."""
    service = AccountService(ctx.obj["db"])

    try:
        account = service.get_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Account {account.id}")
    click.echo(f"  User:     {account.user_id}")
    click.echo(f"  Currency: {account.currency}")
    click.echo(f"  Balance:  {format_amount(account.balance)}")
    click.echo(f"  Status:   {account.status}")


@click.command("balance")
@click.argument("user_id", metavar="USER_ID")
@click.option("--currency", type=click.Choice(CURRENCIES), help="Account currency")
@click.pass_context
def show_balance(ctx, user_id: str, currency: str | None):
    """Show the balance of a user's account.

    Examples:
        ledgerkit balance 1
        ledgerkit balance 1 --currency USD
    """
    service = AccountService(ctx.obj["db"])

    try:
        balance = service.get_balance(user_id, currency=currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"User {balance.user_id} balance: {format_amount(balance.balance)} {balance.currency}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
    cli.add_command(show_balance)
