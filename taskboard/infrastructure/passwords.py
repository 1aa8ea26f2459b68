"""Password Hashing — salted hashes via werkzeug.security.

Invariants:
    - Plaintext passwords are never persisted or logged
    - verify_password never raises for malformed stored hashes (returns False)
"""

from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        return False
