import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from deskpet.exceptions import AuthError

ALGORITHM = "HS256"

# auto_error is off so a missing header goes through AuthError (401) like a bad token
security = HTTPBearer(auto_error=False)


class TokenAuthentication:
    """Issues and verifies the stateless session tokens.

    The token is a signed JWT whose ``sub`` claim is the account id. Nothing is
    stored server side, so a token stays valid until it expires.
    """

    def __init__(self, secret: str, expire_minutes: int = 60):
        self.secret = secret
        self.expire_minutes = expire_minutes

    def issue_token(self, account_id: UUID, now: datetime | None = None) -> str:
        """Issue a token bound to the account

        Args:
            account_id (UUID): account the token identifies
            now (datetime | None): issue time, defaults to the current UTC time

        Returns:
            str: encoded token
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {"sub": str(account_id), "iat": int(issued_at.timestamp())}
        if self.expire_minutes > 0:
            expires_at = issued_at + timedelta(minutes=self.expire_minutes)
            payload["exp"] = int(expires_at.timestamp())
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def decode_token(self, token: str) -> UUID:
        """Verify the token and return the account id it carries

        Raises:
            AuthError: The token is expired, tampered with or malformed
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            logging.info("Rejected expired token")
            raise AuthError("Token has expired")
        except JWTError as e:
            logging.info(f"Rejected invalid token: {e}")
            raise AuthError("Invalid token")

        subject = payload.get("sub")
        try:
            return UUID(str(subject))
        except ValueError:
            logging.warning("Token carries a malformed account id")
            raise AuthError("Invalid token")


def get_token_authentication(request: Request) -> TokenAuthentication:
    return request.app.state.token_authentication


async def get_current_account_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_authentication: TokenAuthentication = Depends(get_token_authentication),
) -> UUID:
    """Resolve the bearer token of the request to an account id."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    return token_authentication.decode_token(credentials.credentials)
