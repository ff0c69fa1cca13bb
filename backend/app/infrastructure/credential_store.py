"""Credential Store — one-way password hashing and verification with bcrypt.

Invariants:
    - Plaintext passwords never leave this module except as bcrypt digests
    - verify() returns False (never raises) for malformed digests and for inputs
      over 72 bytes, which bcrypt would otherwise truncate or refuse

Design Decisions:
    - bcrypt directly instead of passlib: passlib breaks with bcrypt 4.1+ during initialization
    - Cost factor injected from settings: tests run with the minimum (4)
    - bcrypt only reads the first 72 bytes; longer inputs are rejected at the schema layer
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


class CredentialStore:
    """Hashes and verifies passwords. Owns no other state."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        candidate = plaintext.encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(candidate, digest.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Unusable password digest: {e}")
            return False
