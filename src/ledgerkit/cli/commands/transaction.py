"""Transaction commands."""

import json

import click

from ledgerkit.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import CURRENCIES, TransactionRequest
from ledgerkit.domain.errors import DomainError, StorageError
from ledgerkit.domain.transaction import TransactionEngine
from ledgerkit.utils.amount_parser import format_amount
from ledgerkit.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Apply and inspect transactions."""
    pass


@transaction_group.command("apply")
@click.argument("user_id", metavar="USER_ID")
@click.option("--id", "transaction_id", required=True, help="Caller-unique transaction ID")
@click.option("--amount", required=True, help="Positive amount, e.g. 10.50")
@click.option("--type", "transaction_type", required=True, help="win or lose")
@click.option("--source", required=True, help="game, server or payment")
@click.option("--currency", type=click.Choice(CURRENCIES), help="Account currency (defaults to the user's first account)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def apply_transaction(
    ctx,
    user_id: str,
    transaction_id: str,
    amount: str,
    transaction_type: str,
    source: str,
    currency: str | None,
    as_json: bool,
):
    """Apply a transaction to a user's account.

    A win adds the amount to the balance, a lose subtracts it. The balance
    can never go below zero and a transaction ID can only be used once.

    Examples:
        ledgerkit transaction apply 1 --id tx-1 --amount 50.00 --type win --source game
        ledgerkit transaction apply 1 --id tx-2 --amount 20 --type lose --source payment
    """
    engine = TransactionEngine(ctx.obj["db"])
    request = TransactionRequest(
        id=transaction_id, amount=amount, source=source, type=transaction_type
    )

    try:
        result = engine.apply_for_user(user_id, request, currency=currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"Applied transaction '{result.transaction.id}'")
    click.echo(f"  Account: {result.account.id}")
    click.echo(f"  Type:    {result.transaction.type} ({result.transaction.source})")
    click.echo(f"  Amount:  {format_amount(result.transaction.amount)}")
    click.echo(f"  Balance: {format_amount(result.new_balance)} {result.account.currency}")


@transaction_group.command("show")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show a committed transaction."""
    engine = TransactionEngine(ctx.obj["db"])

    try:
        txn = engine.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StorageError as e:
        handle_storage_error(ctx, e)

    click.echo(f"Transaction '{txn.id}'")
    click.echo(f"  Account:  {txn.account_id}")
    click.echo(f"  Type:     {txn.type}")
    click.echo(f"  Source:   {txn.source}")
    click.echo(f"  Amount:   {format_amount(txn.amount)}")
    click.echo(f"  Inserted: {txn.inserted_at:%Y-%m-%d %H:%M:%S}")


@transaction_group.command("list")
@click.option("--account", "account_id", type=int, help="Only transactions of this account ID")
@click.option("--user", "user_id", help="Only transactions of this user's account")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', '7 days ago')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of transactions")
@click.pass_context
def list_transactions(
    ctx,
    account_id: int | None,
    user_id: str | None,
    start_date: str | None,
    end_date: str | None,
    limit: int | None,
):
    """List committed transactions, oldest first.

    Examples:
        ledgerkit transaction list --user 1
        ledgerkit transaction list --account 2 --start-date "this month"
    """
    db = ctx.obj["db"]
    engine = TransactionEngine(db)

    if account_id is not None and user_id is not None:
        click.echo("Error: --account and --user cannot be combined.", err=True)
        ctx.exit(1)

    start = end = None
    try:
        if start_date:
            start = parse_date(start_date)
        if end_date:
            end = parse_date(end_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        if user_id is not None:
            account_id = AccountService(db).get_account_by_user(user_id).id
        transactions = engine.list_transactions(
            account_id=account_id, start_date=start, end_date=end, limit=limit
        )
    except StorageError as e:
        handle_storage_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':<24} {'Account':>7} {'Type':<5} {'Source':<8} {'Amount':>12}  Inserted")
    click.echo("-" * 80)
    for txn in transactions:
        sign = "+" if txn.type == "win" else "-"
        click.echo(
            f"{txn.id:<24} {txn.account_id:>7} {txn.type:<5} {txn.source:<8} "
            f"{sign}{txn.amount:>11,.2f}  {txn.inserted_at:%Y-%m-%d %H:%M}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
