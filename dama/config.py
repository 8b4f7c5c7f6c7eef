# dama/config.py
from dataclasses import dataclass, field
import logging
import os
import tomllib

from dama.engine.search import DEFAULT_CACHE_SIZE, DEFAULT_DEPTH


@dataclass
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    cache_size: int = DEFAULT_CACHE_SIZE


@dataclass
class UIConfig:
    square_size: int = 80
    margin: int = 20
    sidebar_width: int = 240
    anim_seconds: float = 0.35
    move_delay: float = 0.25  # pause before and after a computer move, seconds


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    mode: str = "pvc"
    computer_player: int = 2
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "dama.toml") -> "Config":
        cfg = Config()
        if os.path.exists(path):
            with open(path, "rb") as f:
                raw = tomllib.load(f)
            for section in ("search", "ui"):
                for k, v in raw.get(section, {}).items():
                    if hasattr(getattr(cfg, section), k):
                        setattr(getattr(cfg, section), k, v)
            for k in ("mode", "computer_player", "log_level"):
                if k in raw:
                    setattr(cfg, k, raw[k])
        # allow env override of depth for quick debugging
        override_depth = os.environ.get("DAMA_SEARCH_DEPTH")
        if override_depth:
            try:
                cfg.search.depth = int(override_depth)
            except ValueError:
                logging.getLogger(__name__).warning(
                    "ignoring DAMA_SEARCH_DEPTH=%r, not an integer", override_depth)
        return cfg


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("dama")
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
