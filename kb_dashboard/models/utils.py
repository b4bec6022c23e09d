from enum import Enum
from typing import NamedTuple, Optional

DEFAULT_BIND = ":8080"
DEFAULT_HOST = "0.0.0.0"

# Case-sensitive, so "yes", "on" or "TrUe" are not recognized
TRUE_STRINGS = {"1", "t", "T", "true", "TRUE", "True"}
FALSE_STRINGS = {"0", "f", "F", "false", "FALSE", "False"}


class ExitCode(Enum):
    SUCCESS = 0
    FAILURE = 1


class BindAddress(NamedTuple):
    host: str
    port: int

    def __str__(self):
        return f"{self.host}:{self.port}"


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Flag parsing for environment variables; unrecognized values fall back to `default`."""
    if value is None:
        return default
    normalized = value.strip()
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False
    return default


def parse_bind(bind: Optional[str]) -> BindAddress:
    """Parse a `host:port` bind address. An empty host means all interfaces, e.g. ':8080'."""
    bind = (bind or "").strip() or DEFAULT_BIND
    host, sep, port = bind.rpartition(":")
    if not sep:
        raise ValueError(f"Bind address must be in the form host:port, got '{bind}'")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in bind address '{bind}'")
    if not 0 <= port_number <= 65535:
        raise ValueError(f"Port out of range in bind address '{bind}'")
    # [::1]:8080
    host = host.strip("[]")
    return BindAddress(host=host or DEFAULT_HOST, port=port_number)
