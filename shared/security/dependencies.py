from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from .jwt_handler import verify_access_token

# Storefront and admin both send "Authorization: Bearer <token>".
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/user/login", auto_error=False)


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)) -> str:
    """Return the account id carried in a valid bearer token, or fail with 401."""
    unauthenticated = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = verify_access_token(token) if token else None
    if not payload or payload.get("sub") is None:
        raise unauthenticated

    account_id = str(payload["sub"])
    # Read by the rate limiter key function.
    request.state.user_id = account_id
    return account_id
