import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from deskpet.authentication.token_authentication import TokenAuthentication
from deskpet.create_engine import create_engine
from deskpet.db import create_session_factory, create_tables
from deskpet.exceptions import (
    DeskPetException,
    deskpet_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from deskpet.load_secrets import ServerConfig, load_config
from deskpet.routers.auth import auth_router
from deskpet.routers.progress import progress_router
from deskpet.services.account_service import AccountService


def create_app(config: ServerConfig) -> FastAPI:
    """Build the API around an explicit configuration.

    The engine, token issuer and account service live on ``app.state``; the
    routers reach them through dependencies.
    """
    logging.basicConfig(level=config.log_level)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    engine = create_engine(config.database_url)

    @asynccontextmanager
    async def lifespan(app):
        """Create the account table if it is missing, dispose the engine on shutdown."""
        await create_tables(engine)
        logging.info(f"DeskPet API started with {config.reward_tier_count} reward tiers")
        try:
            yield
        finally:
            await engine.dispose()
            logging.info("Stop Server")

    app = FastAPI(title="DeskPet API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    token_authentication = TokenAuthentication(config.secret, config.token_expire_minutes)
    app.state.config = config
    app.state.engine = engine
    app.state.token_authentication = token_authentication
    app.state.account_service = AccountService(
        create_session_factory(engine),
        token_authentication,
        pepper_data=config.pepper_data,
        reward_tier_count=config.reward_tier_count,
    )

    app.add_exception_handler(DeskPetException, deskpet_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the DeskPet API!"}

    app.include_router(auth_router)
    app.include_router(progress_router)
    return app


app = create_app(load_config())


if __name__ == "__main__":
    uvicorn.run("deskpet.main:app", host="0.0.0.0", port=5001)
