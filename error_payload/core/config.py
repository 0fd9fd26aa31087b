"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
import os
import pkgutil

from error_payload.core.exceptions import PayloadConfigurationError
from error_payload.parsing.field_constructor import FieldConstructor

logger = logging.getLogger(__name__)

DEFAULT_FIELD_CONSTRUCTOR = "error_payload.parsing.field_constructor:DefaultFieldConstructor"
DEFAULT_CAMELIZE_FIELDS = True
DEFAULT_ERROR_STATUS_CODE = 400

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise PayloadConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


@dataclass(frozen=True)
class PayloadSettings:
    """Runtime settings for payload construction."""

    field_constructor_path: str
    camelize_fields: bool
    error_status_code: int

    def safe_for_logging(self) -> dict[str, str | int | bool]:
        """Return payload settings for logs."""
        return {
            "field_constructor_path": self.field_constructor_path,
            "camelize_fields": self.camelize_fields,
            "error_status_code": self.error_status_code,
        }


@lru_cache(maxsize=1)
def get_payload_settings() -> PayloadSettings:
    """Load payload settings from the environment."""
    settings = PayloadSettings(
        field_constructor_path=os.getenv("ERROR_PAYLOAD_FIELD_CONSTRUCTOR", DEFAULT_FIELD_CONSTRUCTOR),
        camelize_fields=_get_bool_env("ERROR_PAYLOAD_CAMELIZE_FIELDS", DEFAULT_CAMELIZE_FIELDS),
        error_status_code=_get_int_env("ERROR_PAYLOAD_ERROR_STATUS_CODE", DEFAULT_ERROR_STATUS_CODE),
    )
    logger.info("Loaded payload settings=%s", settings.safe_for_logging())
    return settings


@lru_cache(maxsize=1)
def get_field_constructor() -> FieldConstructor:
    """Resolve the configured field constructor once per process."""
    return load_field_constructor(get_payload_settings().field_constructor_path)


def load_field_constructor(path: str) -> FieldConstructor:
    """Import a field constructor class or instance from a ``module:attr`` path."""
    try:
        target = pkgutil.resolve_name(path)
    except (ImportError, AttributeError, ValueError) as exc:
        raise PayloadConfigurationError(f"Cannot import field constructor {path!r}") from exc

    constructor = target() if isinstance(target, type) else target
    if not isinstance(constructor, FieldConstructor):
        raise PayloadConfigurationError(f"Field constructor {path!r} does not implement build_path")
    return constructor
