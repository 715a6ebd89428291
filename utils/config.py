# utils/config.py
import os
from pathlib import Path
import yaml
from dotenv import load_dotenv

from utils.logger import logger

BASE_DIR = Path(__file__).resolve().parents[1]


def resolve_env(obj):
    """Replace "${VAR}" string leaves with the value of the environment variable."""
    if isinstance(obj, dict):
        return {k: resolve_env(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [resolve_env(v) for v in obj]
    if isinstance(obj, str) and obj.startswith("${") and obj.endswith("}"):
        varname = obj[2:-1]
        return os.getenv(varname, "")
    return obj


def load_cfg(cfg_path: str | None = None):

    cfg_file = Path(cfg_path) if cfg_path else (BASE_DIR / "config.yaml")

    load_dotenv(BASE_DIR / ".env")

    with open(cfg_file, "r", encoding="utf-8") as f:
        raw_cfg = yaml.safe_load(f) or {}

    cfg = resolve_env(raw_cfg)
    logger.debug(f"Config loaded from {cfg_file}")
    return cfg
