# seeding/config.py
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from seeding.errors import SeedConfigError

BASE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_DEV_NETWORKS = ["development", "test", "develop", "dev", "docker", "coverage"]


class CountersConfig(BaseModel):
    salt: int = Field(default=729436712, ge=0)
    nonce: int = Field(default=238947238, ge=0)


class OutputConfig(BaseModel):
    dir: str = "build"
    file: str = "seeds.json"


class SeedSettings(BaseModel):
    """Seeding runtime configuration."""
    counters: CountersConfig = CountersConfig()
    trader_index: int = Field(default=8, ge=0)
    dev_networks: list[str] = Field(default_factory=lambda: list(DEFAULT_DEV_NETWORKS))
    output: OutputConfig = OutputConfig()

    def output_path(self, base_dir: Path | None = None) -> Path:
        out_dir = Path(self.output.dir)
        if not out_dir.is_absolute():
            out_dir = (base_dir or BASE_DIR) / out_dir
        return out_dir / self.output.file


class RpcConfig(BaseModel):
    url: str = ""
    timeout_ms: int = Field(default=3000, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    backoff_ms: int = Field(default=200, ge=0)


class DevChainConfig(BaseModel):
    num_accounts: int = Field(default=10, ge=1)


def _section(cfg: Mapping[str, Any], name: str) -> dict:
    raw = cfg.get(name) if cfg else None
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise SeedConfigError("config section must be a mapping", section=name, got=type(raw).__name__)
    return dict(raw)


def load_settings(cfg: Mapping[str, Any]) -> SeedSettings:
    try:
        return SeedSettings.model_validate(_section(cfg, "seeding"))
    except ValidationError as e:
        raise SeedConfigError("invalid seeding config", errors=e.error_count(), detail=e.errors()[0]["msg"]) from e


def load_rpc_config(cfg: Mapping[str, Any]) -> RpcConfig:
    try:
        return RpcConfig.model_validate(_section(cfg, "rpc"))
    except ValidationError as e:
        raise SeedConfigError("invalid rpc config", errors=e.error_count(), detail=e.errors()[0]["msg"]) from e


def load_devchain_config(cfg: Mapping[str, Any]) -> DevChainConfig:
    try:
        return DevChainConfig.model_validate(_section(cfg, "devchain"))
    except ValidationError as e:
        raise SeedConfigError("invalid devchain config", errors=e.error_count(), detail=e.errors()[0]["msg"]) from e
