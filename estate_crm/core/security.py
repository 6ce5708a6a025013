"""
Credential checks.
Secrets are stored and compared as plaintext; hashing is not part of this engine.
"""
import secrets
from typing import Optional


def verify_secret(plain_secret: Optional[str], stored_secret: Optional[str]) -> bool:
    """Exact match of a submitted secret against the stored one."""
    if plain_secret is None or stored_secret is None:
        return False
    return secrets.compare_digest(
        plain_secret.encode('utf-8'),
        stored_secret.encode('utf-8')
    )
