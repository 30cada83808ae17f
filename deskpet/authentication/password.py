import hashlib
import secrets

HASH_ITERATIONS = 100_000


def create_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str, pepper_data: str = "") -> str:
    """One-way hash of a credential with its per-record salt and the server pepper."""
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        (password + pepper_data).encode(),
        salt.encode(),
        HASH_ITERATIONS,
    )
    return digest.hex()


def verify_password(password: str, salt: str, hash_password_data: str, pepper_data: str = "") -> bool:
    return secrets.compare_digest(hash_password(password, salt, pepper_data), hash_password_data)
