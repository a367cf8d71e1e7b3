from typing import Dict

from sqlalchemy.orm import Session

from pawsocial.core.errors import InvalidIdentifierError, NotFoundError
from pawsocial.models.account import Account


def validate_id(value, field: str = "account_id") -> str:
    if value is None or not str(value).strip():
        raise InvalidIdentifierError(f"{field} is required")
    return str(value)


def require_account(db: Session, account_id: str) -> Account:
    """Load an account or raise NotFoundError."""
    account_id = validate_id(account_id)
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise NotFoundError(f"Account {account_id} not found")
    return account


def lock_accounts(db: Session, *account_ids: str) -> Dict[str, Account]:
    """
    Lock the given account rows for the rest of the transaction.

    Rows are locked in id order so two transactions touching the same pair
    never wait on each other in opposite orders. SQLite drops FOR UPDATE;
    there the engine opens every transaction with BEGIN IMMEDIATE
    (see database.configure_sqlite), so the whole transaction already
    holds the database write lock.
    """
    ids = sorted({validate_id(a) for a in account_ids})

    rows = (
        db.query(Account)
        .filter(Account.id.in_(ids))
        .order_by(Account.id)
        .with_for_update()
        .all()
    )
    found = {row.id: row for row in rows}

    for account_id in ids:
        if account_id not in found:
            raise NotFoundError(f"Account {account_id} not found")

    return found
