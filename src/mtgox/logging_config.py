from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Mapping, Optional


DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FMT = "%(asctime)s | %(levelname)-7s | %(name)-6s | %(message)s"

# client: one INFO line per order placed / cancelled / withdrawal
# http:   DEBUG per request, WARNING per retry
# ledger: WARNING only, for skipped order records
DEFAULT_LEVELS: Dict[str, int] = {
    "client": logging.INFO,
    "http": logging.WARNING,
    "ledger": logging.WARNING,
    "cli": logging.INFO,
}

LEVELS_ENV = "MTGOX_LOG_LEVELS"


def parse_levels(text: str) -> Dict[str, int]:
    """
    "http=DEBUG,ledger=info" -> {"http": 10, "ledger": 20}.
    Unknown level names raise ValueError.
    """
    out: Dict[str, int] = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, level = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"bad log level entry: {item!r} (want name=LEVEL)")
        value = logging.getLevelName(level.strip().upper())
        if not isinstance(value, int):
            raise ValueError(f"unknown log level {level!r} for {name.strip()}")
        out[name.strip()] = value
    return out


def apply_levels(overrides: Optional[Mapping[str, int]] = None) -> Dict[str, int]:
    """Set the package namespaces' levels: defaults < MTGOX_LOG_LEVELS < overrides."""
    levels = dict(DEFAULT_LEVELS)
    env = os.getenv(LEVELS_ENV)
    if env:
        levels.update(parse_levels(env))
    if overrides:
        levels.update(overrides)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    return levels


def setup(
    log_dir: Optional[str] = "logs",
    console_level: int = logging.INFO,
    levels: Optional[Mapping[str, int]] = None,
    filename: str = "mtgox.log",
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> None:
    """Console handler always; rotating file handler only when `log_dir` is given."""
    root = logging.getLogger()
    if getattr(root, "_mtgox_logging_installed", False):
        apply_levels(levels)
        return

    root.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(CONSOLE_FMT))
    root.addHandler(ch)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            Path(log_dir) / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(DEFAULT_FMT))
        root.addHandler(fh)

    # requests is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    apply_levels(levels)

    root._mtgox_logging_installed = True  # type: ignore[attr-defined]
