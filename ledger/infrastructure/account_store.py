"""SQLAlchemy-backed repository for accounts."""

from collections.abc import Sequence

from sqlalchemy import delete, insert, update

from ledger.application.ports.account_store import AccountStorePort
from ledger.application.ports.database import DatabaseEnginePort
from ledger.application.ports.projections import AccountBalanceProjectionPort
from ledger.domain.exceptions import NotFoundError, ValidationError
from ledger.domain.models import Account, AccountBalanceRow, DeleteResult
from ledger.domain.services import parse_amount
from ledger.infrastructure.db import translate_db_errors
from ledger.infrastructure.logging.logger import get_app_logger
from ledger.infrastructure.schema import account_table


class SqlAlchemyAccountStore(AccountStorePort):
    """Repository for accounts whose totals come from a balance projection.

    The store never computes totals itself; every read goes through the
    projection it was given.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        balance_projection: AccountBalanceProjectionPort,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            balance_projection: Read-only source of account totals.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._balance_projection = balance_projection
        self._logger = logger or get_app_logger()

    def list_accounts(self) -> list[Account]:
        """Return every account ordered by name, with its current total."""
        rows = self._balance_projection.fetch_account_balances()
        return [self._row_to_account(row) for row in rows]

    def find_by_id(self, account_id: int) -> Account:
        """Return one account with its current total.

        Raises:
            NotFoundError: If the account does not exist.
        """
        row = self._balance_projection.fetch_account_balance(account_id)
        if row is None:
            raise NotFoundError(
                f"Account not found: {account_id}",
                details={"account_id": account_id},
            )
        return self._row_to_account(row)

    def save(self, account: Account) -> Account:
        """Insert an account.

        Args:
            account: Account to persist; id and total are ignored.

        Returns:
            Account: Stored account with its identity and total.
        """
        params = self._account_params(account)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Account insert"):
            with engine.begin() as conn:
                result = conn.execute(insert(account_table).values(**params))
                account_id = result.inserted_primary_key[0]
        self._logger.info(f"Saved account {account_id} ({params['name']})")
        return self.find_by_id(account_id)

    def update(self, account: Account) -> Account:
        """Update name and initial amount of an account.

        Returns:
            Account: Account read back with its recomputed total.

        Raises:
            ValidationError: If the account has no id or an empty name.
            NotFoundError: If no account has this identity.
        """
        if not account.id:
            raise ValidationError("Can't update an account without id")
        params = self._account_params(account)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Account update"):
            with engine.begin() as conn:
                result = conn.execute(
                    update(account_table)
                    .where(account_table.c.id == account.id)
                    .values(**params)
                )
                if result.rowcount == 0:
                    raise NotFoundError(
                        f"Account not found: {account.id}",
                        details={"account_id": account.id},
                    )
        self._logger.info(f"Updated account {account.id}")
        return self.find_by_id(account.id)

    def delete_many(self, ids: Sequence[int]) -> DeleteResult:
        """Delete accounts in one statement.

        Entries and categories are not cascaded; deleting an account that
        entries still reference fails with ValidationError.

        Args:
            ids: Identities to delete; duplicates are ignored.

        Returns:
            DeleteResult: Requested and actually deleted row counts.
        """
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return DeleteResult(requested_count=0, deleted_count=0)
        engine = self._db_port.get_ledger_engine()
        with translate_db_errors("Account delete"):
            with engine.begin() as conn:
                result = conn.execute(
                    delete(account_table).where(account_table.c.id.in_(unique_ids))
                )
        outcome = DeleteResult(
            requested_count=len(unique_ids),
            deleted_count=result.rowcount,
        )
        if not outcome.is_complete:
            self._logger.warning(
                f"Deleted {outcome.deleted_count} of {outcome.requested_count} "
                f"accounts; {outcome.missing_count} did not exist"
            )
        return outcome

    @staticmethod
    def _account_params(account: Account) -> dict:
        name = (account.name or "").strip()
        if not name:
            raise ValidationError("Account name must not be empty")
        return {
            "name": name,
            "initial_amount": parse_amount(account.initial_amount),
        }

    @staticmethod
    def _row_to_account(row: AccountBalanceRow) -> Account:
        return Account(
            id=row.account_id,
            name=row.name,
            initial_amount=row.initial_amount,
            total=row.total,
        )


__all__ = ["SqlAlchemyAccountStore"]
