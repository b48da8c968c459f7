import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from . import config
from .errors import InvalidCredentials

logger = logging.getLogger(__name__)

# Secrets are provisioned out of band, either as bcrypt hashes or as plain
# pincodes. "plaintext" must stay last: it identifies any string.
pwd_context = CryptContext(schemes=["bcrypt", "plaintext"], deprecated="auto")


# Verify a plain secret against the stored value
def verify_secret(plain_secret: str, stored_secret: str) -> bool:
    if not stored_secret:
        pwd_context.dummy_verify()
        return False
    try:
        if pwd_context.identify(stored_secret) == "plaintext":
            # keep the cost equal to a bcrypt check and to an unknown identity
            pwd_context.dummy_verify()
        return pwd_context.verify(plain_secret, stored_secret)
    except (ValueError, TypeError):
        logger.warning("Stored secret could not be parsed, rejecting login")
        return False


# Burn the same time a real verification would take
def dummy_verify() -> None:
    pwd_context.dummy_verify()


# Create JWT access token
def create_access_token(data: dict, expires_minutes: int) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


# Decode and verify a JWT access token of the given kind
def decode_access_token(token: str, kind: str) -> dict:
    try:
        claims = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise InvalidCredentials()
    if claims.get("kind") != kind or not claims.get("sub"):
        raise InvalidCredentials()
    return claims
