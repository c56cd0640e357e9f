# beachbbq/auth.py
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from datetime import datetime, timedelta
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from beachbbq import database, models
from beachbbq.config import settings


# Load Security Configurations
SECRET_KEY = settings.JWT_SECRET_KEY
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

DRIVER_ROLE = "driver"

# Password Hashing Configuration
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# OAuth2 Bearer Token (For Login)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)

# Password Hashing Functions
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

# JWT Token Creation
def create_access_token(data: dict) -> str:
    """
    Creates a JWT access token for authentication.
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def create_driver_token(driver_code: str) -> str:
    return create_access_token(data={"sub": f"driver:{driver_code}", "role": DRIVER_ROLE})

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _credentials_exception()
    if payload.get("sub") is None:
        raise _credentials_exception()
    return payload

def _user_from_payload(payload: dict, db: Session) -> models.User:
    if payload.get("role") == DRIVER_ROLE:
        raise _credentials_exception()
    user = db.query(models.User).filter(models.User.username == payload["sub"]).first()
    if user is None:
        raise _credentials_exception()
    return user

# JWT Token Verification and User Retrieval
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    return _user_from_payload(decode_token(token), db)

# Secure Admin Verification Dependency
def verify_admin_user(current_user: models.User = Depends(get_current_user)):
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to perform this action (Admin Only)."
        )
    return current_user

# Drivers hold a driver token; any signed-in user may also see the delivery board
def verify_driver_access(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(database.get_db),
) -> dict:
    if not token:
        raise _credentials_exception()
    payload = decode_token(token)
    if payload.get("role") == DRIVER_ROLE:
        return payload
    user = _user_from_payload(payload, db)
    return {"sub": user.username, "role": "admin" if user.is_admin else "user"}

# Moving a delivery along is for drivers and admins only
def verify_driver_or_admin(access: dict = Depends(verify_driver_access)) -> dict:
    if access["role"] not in (DRIVER_ROLE, "admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only drivers and admins can update deliveries."
        )
    return access

def check_driver_code(driver_code: str) -> bool:
    return driver_code.strip().upper() in {code.upper() for code in settings.DRIVER_CODES}
