import argparse
import asyncio

from deskpet.authentication.token_authentication import TokenAuthentication
from deskpet.create_engine import create_engine
from deskpet.db import create_session_factory, create_tables
from deskpet.exceptions import DeskPetException
from deskpet.load_secrets import load_config
from deskpet.services.account_service import AccountService


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Register a DeskPet account")
    parser.add_argument("--username", type=str, help="Username", required=True)
    parser.add_argument("--password", type=str, help="Password", required=True)
    return parser


async def main(user_name: str, password: str) -> int:
    config = load_config()
    engine = create_engine(config.database_url)
    try:
        await create_tables(engine)
        account_service = AccountService(
            create_session_factory(engine),
            TokenAuthentication(config.secret, config.token_expire_minutes),
            pepper_data=config.pepper_data,
            reward_tier_count=config.reward_tier_count,
        )
        await account_service.register(user_name, password)
    except DeskPetException as e:
        print(f"Could not create {user_name}: {e.message}")
        return 1
    finally:
        await engine.dispose()
    print(f"Created {user_name}")
    return 0


def run() -> None:
    args = get_parser().parse_args()
    raise SystemExit(asyncio.run(main(args.username, args.password)))


if __name__ == "__main__":
    run()
