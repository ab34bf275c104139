"""Runtime configuration for syncgate."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# Channel that every user can read; assigned to deleted documents of unknown type
PUBLIC_CHANNEL = "!"

# Prefix that marks a grantee as a role rather than a user
ROLE_PREFIX = "role:"


@dataclass
class SyncGateConfig:
    """Process-level settings used by the CLI and by embedding applications."""

    definitions_path: Path
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> SyncGateConfig:
        """Create config from environment variables.

        Resolution order for the definitions path:
        1. SYNCGATE_DEFINITIONS_PATH env var
        2. {base_path}/definitions
        3. ./definitions
        """
        log_level = os.environ.get("SYNCGATE_LOG_LEVEL", "WARNING").upper()

        definitions_path = os.environ.get("SYNCGATE_DEFINITIONS_PATH")
        if definitions_path:
            return cls(definitions_path=Path(definitions_path), log_level=log_level)

        if base_path:
            return cls(definitions_path=base_path / "definitions", log_level=log_level)

        return cls(definitions_path=Path("definitions"), log_level=log_level)

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the syncgate logger hierarchy."""
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("syncgate").setLevel(level)
