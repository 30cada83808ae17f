import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from deskpet.exceptions import ConflictError, InternalError
from deskpet.models.account_models import AccountModel
from deskpet.models.account_schemas import AccountTable

# These helpers never commit; the service layer owns the transaction.


class CreateAccount:
    @staticmethod
    async def add_account(
        username: str, hash_password: str, salt: str, session: AsyncSession
    ) -> UUID:
        """Add a new account row with initial progress

        Args:
            username (str): unique username
            hash_password (str): hashed credential
            salt (str): salt used for the hash

        Returns:
            UUID: id of the new account
        """
        try:
            new_account = AccountTable(
                username=username,
                hash_password=hash_password,
                salt=salt,
                rewards=[],
                level=1,
                revision=0,
            )
            session.add(new_account)
            await session.flush()
            return new_account.account_id
        except IntegrityError:
            logging.info(f"Username already taken: {username}")
            raise ConflictError("Username already taken")
        except SQLAlchemyError as e:
            logging.error(f"Error creating account: {e}")
            raise InternalError()


class ReadAccount:
    @staticmethod
    async def read_account_by_username(username: str, session: AsyncSession) -> AccountModel | None:
        try:
            stmt = select(AccountTable).where(AccountTable.username == username)
            result = await session.execute(stmt)
            account = result.scalars().first()
        except SQLAlchemyError as e:
            logging.error(f"Error reading account by username: {e}")
            raise InternalError()
        if account is None:
            return None
        return AccountModel.model_validate(account)

    @staticmethod
    async def read_account(account_id: UUID, session: AsyncSession) -> AccountModel | None:
        try:
            stmt = select(AccountTable).where(AccountTable.account_id == account_id)
            result = await session.execute(stmt)
            account = result.scalars().first()
        except SQLAlchemyError as e:
            logging.error(f"Error reading account: {e}")
            raise InternalError()
        if account is None:
            return None
        return AccountModel.model_validate(account)


class UpdateAccount:
    @staticmethod
    async def update_progress_if_revision(
        account_id: UUID,
        expected_revision: int,
        level: int,
        rewards: List[str],
        session: AsyncSession,
    ) -> bool:
        """Write new progress only if nobody else wrote since ``expected_revision`` was read

        Args:
            account_id (UUID): account to update
            expected_revision (int): revision the caller based its change on
            level (int): new level
            rewards (List[str]): new reward set

        Returns:
            bool: True if the row was updated, False if the revision moved on
        """
        try:
            stmt = (
                update(AccountTable)
                .where(
                    AccountTable.account_id == account_id,
                    AccountTable.revision == expected_revision,
                )
                .values(level=level, rewards=rewards, revision=expected_revision + 1)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
        except SQLAlchemyError as e:
            logging.error(f"Failed to update progress: {e}")
            raise InternalError()
        return result.rowcount == 1

    @staticmethod
    async def overwrite_progress(
        account_id: UUID, level: int, rewards: List[str], session: AsyncSession
    ) -> bool:
        """Write progress unconditionally (still bumps the revision)

        Returns:
            bool: False if the account does not exist
        """
        try:
            stmt = (
                update(AccountTable)
                .where(AccountTable.account_id == account_id)
                .values(level=level, rewards=rewards, revision=AccountTable.revision + 1)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
        except SQLAlchemyError as e:
            logging.error(f"Failed to overwrite progress: {e}")
            raise InternalError()
        return result.rowcount == 1
