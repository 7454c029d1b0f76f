"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database or a real session secret
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("LOG_FORMAT", "text")
