"""
config_loader: read the integrator's JSON configuration.

Decoding is permissive the way a typed JSON decoder is: unknown keys are
ignored and missing keys (or null) fall back to zero values. A value of the
wrong JSON kind (a string where a port number belongs, an object where the
source list belongs) is a ConfigError. Values themselves are not validated;
a bad URI or port only fails when it is used.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from errors import ConfigError
from models import (
    DEFAULT_BODY,
    DEFAULT_SENDER,
    DEFAULT_SUBJECT,
    EmailNotification,
    Endpoint,
    EndpointType,
    HttpSettings,
    IntegratorConfig,
    SmtpSettings,
)

DEFAULT_CONFIG_PATH = "config.json"


def _object(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}.{key}: expected an object, got {type(value).__name__}")
    return value


def _array(data: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where}.{key}: expected an array, got {type(value).__name__}")
    return value


def _string(data: Dict[str, Any], key: str, where: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _integer(data: Dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass in Python, but true is not a port number.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}.{key}: expected an integer, got {value!r}")
    return value


def _seconds(data: Dict[str, Any], key: str, where: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where}.{key}: expected a number of seconds, got {value!r}")
    return float(value)


def _endpoints(data: Dict[str, Any], key: str) -> Tuple[Endpoint, ...]:
    endpoints = []
    for index, item in enumerate(_array(data, key, "config")):
        where = f"config.{key}[{index}]"
        if item is None:
            item = {}
        if not isinstance(item, dict):
            raise ConfigError(f"{where}: expected an object, got {type(item).__name__}")
        raw_type = _string(item, "type", where)
        endpoints.append(
            Endpoint(
                name=_string(item, "name", where),
                type=EndpointType.parse(raw_type),
                uri=_string(item, "uri", where),
                raw_type=raw_type,
            )
        )
    return tuple(endpoints)


def _email(data: Dict[str, Any]) -> EmailNotification:
    notifications = _object(data, "notifications", "config")
    email = _object(notifications, "email", "config.notifications")
    where = "config.notifications.email"
    smtp = _object(email, "smtp", where)
    smtp_where = where + ".smtp"
    return EmailNotification(
        smtp=SmtpSettings(
            server=_string(smtp, "server", smtp_where),
            port=_integer(smtp, "port", smtp_where),
            username=_string(smtp, "username", smtp_where),
            password=_string(smtp, "password", smtp_where),
            timeout=_seconds(smtp, "timeout", smtp_where),
        ),
        recipient=_string(email, "recipient", where),
        sender=_string(email, "sender", where, DEFAULT_SENDER),
        subject=_string(email, "subject", where, DEFAULT_SUBJECT),
        body=_string(email, "body", where, DEFAULT_BODY),
    )


def parse_config(data: Any) -> IntegratorConfig:
    """Build an IntegratorConfig from already-decoded JSON."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config: expected a JSON object, got {type(data).__name__}")

    http = _object(data, "http", "config")
    return IntegratorConfig(
        data_sources=_endpoints(data, "data_sources"),
        data_targets=_endpoints(data, "data_targets"),
        email=_email(data),
        http=HttpSettings(timeout=_seconds(http, "timeout", "config.http")),
    )


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> IntegratorConfig:
    """
    Open `path` and decode it into an IntegratorConfig.

    Raises ConfigError if the file cannot be opened, is not JSON, or has
    values of the wrong kind.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot open config file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"config file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"config file {path} is not valid JSON: {e}") from e

    return parse_config(data)
