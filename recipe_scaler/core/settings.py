import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from recipe_scaler.core.logging_config import get_logger

load_dotenv()

logger = get_logger(__name__)

CONFIG_ENV_VAR = "RECIPE_SCALER_CONFIG"


@dataclass(frozen=True)
class ScalerSettings:
    default_servings: int = 4
    phrase_context_chars: int = 20
    round_results: bool = True
    log_level: str = "INFO"


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _as_positive_int(value: Any, default: int) -> int:
    result = _as_int(value, default)
    return result if result > 0 else default


def _config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "config" / "scaler_config.json"


def load_settings(path: Optional[Path] = None) -> ScalerSettings:
    config_path = path or _config_path()
    try:
        data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ScalerSettings()
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid scaler config JSON at {config_path}: {exc}")
        return ScalerSettings()

    if not isinstance(data, dict):
        logger.warning(f"Scaler config at {config_path} is not a JSON object")
        return ScalerSettings()

    return ScalerSettings(
        default_servings=_as_positive_int(data.get("default_servings"), 4),
        phrase_context_chars=_as_positive_int(data.get("phrase_context_chars"), 20),
        round_results=_as_bool(data.get("round_results"), True),
        log_level=str(data.get("log_level") or "INFO")
    )


settings = load_settings()
