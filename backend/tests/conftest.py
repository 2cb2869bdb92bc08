"""Root conftest: environment for the whole test run.

Set before any bookpost import so the cached Settings pick them up.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-bookpost-suite-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JOKE_API_KEY", "test-joke-key")
os.environ.setdefault("INVOICE_API_KEY", "")
os.environ.setdefault("LOG_FORMAT", "text")
