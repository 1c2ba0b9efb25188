"""Runtime configuration for the document recovery pipeline.

A single ``RecoveryConfig`` value is built by the caller (or from the
environment) and handed to every stage that needs it.  Nothing in the package
reads configuration from module-level state.

Environment variables (optionally loaded from ``ROOT/.env``):
    DOC_RECOVERY_INCLUDE_HIDDEN_LAYERS      -- "1"/"true"/"yes" disables the visibility filter
    DOC_RECOVERY_SYNTHETIC_PAGE_CHUNK_SIZE  -- structural elements per synthetic page
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()

DEFAULT_SYNTHETIC_PAGE_CHUNK_SIZE = 50

ENV_INCLUDE_HIDDEN_LAYERS = "DOC_RECOVERY_INCLUDE_HIDDEN_LAYERS"
ENV_SYNTHETIC_PAGE_CHUNK_SIZE = "DOC_RECOVERY_SYNTHETIC_PAGE_CHUNK_SIZE"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class RecoveryConfig(BaseModel):
    """Options recognised by the pipeline."""

    model_config = ConfigDict(frozen=True)

    include_hidden_layers: bool = False
    synthetic_page_chunk_size: int = Field(default=DEFAULT_SYNTHETIC_PAGE_CHUNK_SIZE, ge=1)

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "RecoveryConfig":
        """Build a config from environment variables, loading a .env file first."""
        load_dotenv(env_file or ROOT / ".env")
        values: dict = {}

        hidden = os.getenv(ENV_INCLUDE_HIDDEN_LAYERS)
        if hidden is not None:
            values["include_hidden_layers"] = hidden.strip().lower() in _TRUTHY

        chunk_size = os.getenv(ENV_SYNTHETIC_PAGE_CHUNK_SIZE)
        if chunk_size:
            values["synthetic_page_chunk_size"] = int(chunk_size)

        config = cls(**values)
        logger.debug("Loaded config from environment: %s", config)
        return config
