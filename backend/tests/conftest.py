"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use a real provider key or database
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-fake-key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
