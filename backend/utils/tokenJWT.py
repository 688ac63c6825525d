# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import settings
from models.users import User
from schemas.user import TokenData
from utils.errors import AuthError, AuthorizationError

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

# Missing headers are reported by get_current_user, not by the scheme itself
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a new JWT access token
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

# Token claims shared by registration and login
def issue_token_for(user: User) -> str:
    return create_access_token(data={"userId": user.id, "email": user.email, "role": user.role})

def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("Invalid or expired token", status.HTTP_403_FORBIDDEN)

    user_id = payload.get("userId")
    if user_id is None:
        raise AuthError("Invalid or expired token", status.HTTP_403_FORBIDDEN)
    return TokenData(user_id=user_id, email=payload.get("email"), role=payload.get("role"))

# Verify the bearer token and expose its claims on request.state.user
def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")

    claims = decode_access_token(credentials.credentials)
    request.state.user = claims
    return claims

# Single-role check; roles are not hierarchical
def require_role(role: str):
    def _checker(current_user: TokenData = Depends(get_current_user)):
        if current_user.role != role:
            raise AuthorizationError("Insufficient permissions")
        return current_user
    return _checker
