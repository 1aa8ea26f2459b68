"""Root conftest — shared test configuration."""

import os

# Keep tests independent of a developer's .env / data directory
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
