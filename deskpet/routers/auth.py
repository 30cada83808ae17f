from fastapi import APIRouter, Depends, Request

from deskpet.models.api_models import CredentialsModel, MessageModel, TokenModel
from deskpet.services.account_service import AccountService

auth_router = APIRouter(tags=["Auth"])


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


class AuthAPI:
    @staticmethod
    @auth_router.post("/register", response_model=MessageModel)
    async def register(
        credentials: CredentialsModel,
        account_service: AccountService = Depends(get_account_service),
    ) -> MessageModel:
        """Create an account

        Args:
            credentials (CredentialsModel): username (non-empty) and password (3+ characters)

        Returns:
            MessageModel: confirmation, nothing about the stored credential
        """
        await account_service.register(credentials.username, credentials.password)
        return MessageModel(message="User created successfully")

    @staticmethod
    @auth_router.post("/login", response_model=TokenModel)
    async def login(
        credentials: CredentialsModel,
        account_service: AccountService = Depends(get_account_service),
    ) -> TokenModel:
        """Exchange a username and password for a bearer token"""
        token = await account_service.login(credentials.username, credentials.password)
        return TokenModel(token=token)
