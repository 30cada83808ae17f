"""DB service layer for account, login and progress use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- CRUD helpers never commit; every operation runs inside one session.begin().
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool

from deskpet.authentication.password import create_salt, hash_password, verify_password
from deskpet.authentication.token_authentication import TokenAuthentication
from deskpet.crud import CreateAccount, ReadAccount, UpdateAccount
from deskpet.domain import reward_rules
from deskpet.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    PolicyError,
    ValidationError,
)
from deskpet.models.account_models import ProgressModel

MIN_PASSWORD_LENGTH = 3
MAX_CLAIM_ATTEMPTS = 5
INVALID_CREDENTIALS = "Invalid username or password"

# Hashed against when the username is unknown so both login failures cost the same.
_DUMMY_SALT = create_salt()


class AccountService:
    """Auth service and reward/level store over one account table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        token_authentication: TokenAuthentication,
        pepper_data: str = "",
        reward_tier_count: int = 10,
    ):
        self.session_factory = session_factory
        self.token_authentication = token_authentication
        self.pepper_data = pepper_data
        self.reward_tier_count = reward_tier_count

    async def register(self, username: str, password: str) -> None:
        """Create an account with level 1 and no rewards

        Raises:
            ValidationError: empty username or password shorter than 3 characters
            ConflictError: the username is taken
        """
        if not username:
            raise ValidationError("Username must be at least 1 characters long")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        salt = create_salt()
        hashed = await run_in_threadpool(hash_password, password, salt, self.pepper_data)

        async with self.session_factory() as session:
            async with session.begin():
                existing = await ReadAccount.read_account_by_username(username, session)
                if existing is not None:
                    logging.info(f"Registration refused, username taken: {username}")
                    raise ConflictError("Username already taken")
                account_id = await CreateAccount.add_account(username, hashed, salt, session)
        logging.info(f"Registered account {account_id} ({username})")

    async def login(self, username: str, password: str) -> str:
        """Verify the credential and issue a session token

        Raises:
            ValidationError: a field is missing
            AuthError: unknown username or wrong password (same message for both)
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        async with self.session_factory() as session:
            account = await ReadAccount.read_account_by_username(username, session)

        if account is None:
            await run_in_threadpool(hash_password, password, _DUMMY_SALT, self.pepper_data)
            logging.info("Login failed")
            raise AuthError(INVALID_CREDENTIALS)

        verified = await run_in_threadpool(
            verify_password, password, account.salt, account.hash_password, self.pepper_data
        )
        if not verified:
            logging.info("Login failed")
            raise AuthError(INVALID_CREDENTIALS)

        logging.info(f"Login succeeded for account {account.account_id}")
        return self.token_authentication.issue_token(account.account_id)

    async def get_progress(self, account_id: UUID) -> ProgressModel:
        async with self.session_factory() as session:
            account = await ReadAccount.read_account(account_id, session)
        if account is None:
            raise NotFoundError()
        return ProgressModel(level=account.level, rewards=reward_rules.normalize_rewards(account.rewards))

    async def claim_level_reward(self, account_id: UUID, level: int) -> tuple[ProgressModel, bool]:
        """Unlock the reward of ``level`` if the account has reached it.

        The write is a compare-and-set on the account revision. When another
        request wrote in between, the claim is re-evaluated on the fresh row,
        so two identical concurrent claims unlock the reward once.

        Returns:
            tuple[ProgressModel, bool]: progress after the claim, and whether anything changed

        Raises:
            PolicyError: the level is still locked
            ValidationError: not a defined tier
            NotFoundError: the account is gone
        """
        for attempt in range(MAX_CLAIM_ATTEMPTS):
            async with self.session_factory() as session:
                async with session.begin():
                    account = await ReadAccount.read_account(account_id, session)
                    if account is None:
                        raise NotFoundError()

                    try:
                        result = reward_rules.claim_level(
                            account.level, account.rewards, level, self.reward_tier_count
                        )
                    except PolicyError:
                        logging.warning(
                            f"Account {account_id} tried to claim locked level {level} (at {account.level})"
                        )
                        raise

                    if not result.changed:
                        return ProgressModel(level=result.level, rewards=result.rewards), False

                    written = await UpdateAccount.update_progress_if_revision(
                        account_id, account.revision, result.level, result.rewards, session
                    )
            if written:
                logging.info(f"Account {account_id} claimed level {level}, now at level {result.level}")
                return ProgressModel(level=result.level, rewards=result.rewards), True
            logging.info(f"Concurrent update on account {account_id}, retrying claim ({attempt + 1})")

        logging.error(f"Gave up claiming level {level} for account {account_id}")
        raise InternalError()

    async def reset_progress(self, account_id: UUID) -> ProgressModel:
        level, rewards = reward_rules.reset_progress()
        async with self.session_factory() as session:
            async with session.begin():
                written = await UpdateAccount.overwrite_progress(account_id, level, rewards, session)
                if not written:
                    raise NotFoundError()
        logging.info(f"Account {account_id} reset its progress")
        return ProgressModel(level=level, rewards=rewards)
