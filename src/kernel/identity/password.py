"""
Password hashing utilities using bcrypt.
"""

import bcrypt

# Work factor for bcrypt
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Password hashing service."""

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    @staticmethod
    def hash(password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Hashing the same password twice gives two different digests.
        """
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(PasswordHasher._encode(password), salt).decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """
        Check a password against a stored digest.

        Returns False on mismatch and on a malformed digest; never raises.
        """
        try:
            return bcrypt.checkpw(
                PasswordHasher._encode(plain_password),
                hashed_password.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            return False

    @staticmethod
    def needs_rehash(hashed_password: str) -> bool:
        """True if the digest was made with a different work factor."""
        # Format: $2b$<rounds>$<salt+hash>
        parts = hashed_password.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != BCRYPT_ROUNDS


# Convenience functions
def hash_password(password: str) -> str:
    """Hash a password."""
    return PasswordHasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password."""
    return PasswordHasher.verify(plain_password, hashed_password)
