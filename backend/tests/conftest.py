"""Root conftest — shared test configuration."""

import os

# Settings are cached on first import of app.config: set test values before that
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SWEEP_ENABLED", "false")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("LEGACY_STATUS_CODES", "false")
