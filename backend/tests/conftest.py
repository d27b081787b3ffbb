"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or wait on simulated latency
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("CATALOG_LATENCY_MS", "0")
