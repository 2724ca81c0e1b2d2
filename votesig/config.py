"""
Library configuration and logging setup.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "VOTESIG_LOG_LEVEL"
ENV_MAX_SIGN_ATTEMPTS = "VOTESIG_MAX_SIGN_ATTEMPTS"


@dataclass(frozen=True)
class SchemeConfig:
    """Signing behaviour."""
    max_sign_attempts: int = 64
    version_byte: int = ord("0")  # leading byte of every 65-byte entry

    def __post_init__(self) -> None:
        if self.max_sign_attempts < 1:
            raise ValueError("max_sign_attempts must be >= 1")
        if not 0 <= self.version_byte <= 0xFF:
            raise ValueError("version_byte must fit in one byte")


@dataclass(frozen=True)
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass(frozen=True)
class VotesigConfig:
    """Complete configuration."""
    scheme: SchemeConfig = field(default_factory=SchemeConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> VotesigConfig:
        return cls(
            scheme=SchemeConfig(**data.get("scheme", {})),
            log=LogConfig(**data.get("log", {})),
        )

    def save(self, path: str) -> None:
        """Save configuration to a JSON file."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2))
        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> VotesigConfig:
        """Load configuration from a JSON file."""
        data = json.loads(Path(path).read_text())
        logger.info(f"Configuration loaded from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, base: Optional[VotesigConfig] = None) -> VotesigConfig:
        """Overlay ``VOTESIG_*`` environment variables on *base*."""
        base = base or cls()
        scheme = base.scheme
        log = base.log

        attempts = os.environ.get(ENV_MAX_SIGN_ATTEMPTS)
        if attempts is not None:
            scheme = replace(scheme, max_sign_attempts=int(attempts))

        level = os.environ.get(ENV_LOG_LEVEL)
        if level is not None:
            log = replace(log, level=level)

        return cls(scheme=scheme, log=log)


# read once at import; later changes to the environment are not seen
DEFAULT_CONFIG = VotesigConfig.from_env()


def setup_logging(config: LogConfig) -> None:
    """Configure the ``votesig`` logger hierarchy from *config*."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        handlers.append(RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        ))

    root = logging.getLogger("votesig")
    root.setLevel(level)
    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
