import json
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

from bluenoise.common import Point
from bluenoise.errors import InvalidConfigError
from bluenoise.poisson import PoissonDiscConfig

logger = logging.getLogger(__name__)

CONFIG_KEYS = {f.name for f in fields(PoissonDiscConfig)}


def config_from_dict(data: dict[str, Any]) -> PoissonDiscConfig:
    known = {k: v for k, v in data.items() if k in CONFIG_KEYS}
    ignored = sorted(set(data) - CONFIG_KEYS)
    if ignored:
        logger.warning("ignoring unknown config keys: %s", ", ".join(ignored))

    start = known.get("start")
    if start is not None:
        try:
            x, y = start
            known["start"] = Point(float(x), float(y))
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(f"start must be an [x, y] pair, got {start!r}") from e
    return PoissonDiscConfig(**known)


def config_to_dict(cfg: PoissonDiscConfig) -> dict[str, Any]:
    data = asdict(cfg)
    if cfg.start is not None:
        data["start"] = [cfg.start.x, cfg.start.y]
    return data


def load_config(path: Path) -> PoissonDiscConfig:
    if not path.exists():
        logger.debug("no config at %s, using defaults", path)
        return PoissonDiscConfig()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidConfigError(f"{path}: {e}") from e
    except OSError as e:
        raise InvalidConfigError(f"cannot read config {path}: {e.strerror or e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{path}: expected a JSON object")
    return config_from_dict(data)


def save_config(path: Path, cfg: PoissonDiscConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(config_to_dict(cfg), f, indent=2, sort_keys=True)
