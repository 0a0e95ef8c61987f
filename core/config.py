# core/config.py
from __future__ import annotations
import sys
from datetime import timedelta
from pathlib import Path
from typing import Literal, Optional

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VLABS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_file_path: Optional[Path] = None

    history_backend: Literal["file", "session"] = "session"
    history_file_path: Path = Path.home() / ".vlabs" / "pwd_history.json"
    history_key: str = "pwd_history_v1"
    history_limit: int = 10

    default_length: int = 16
    max_length: int = 64


def setup_logging(cfg: Config) -> None:
    logger.remove()
    logger.add(sys.stderr, level=cfg.log_level, backtrace=True, diagnose=False)
    if cfg.log_file_path:
        cfg.log_file_path.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            cfg.log_file_path.resolve(),
            rotation="10 MB",
            retention=timedelta(days=7),
            backtrace=True,
            diagnose=False,
            level=cfg.log_level,
        )


config = Config()
