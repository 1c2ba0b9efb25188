"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from doc_recovery.config import RecoveryConfig

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture
def config() -> RecoveryConfig:
    """Default pipeline configuration."""
    return RecoveryConfig()
