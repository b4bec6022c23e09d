from dataclasses import dataclass
from typing import Dict, List, Optional

from cerberus import Validator
from pydantic import BaseModel

from kb_dashboard.models.kinds import DEFAULT_KIND_FIELD, DEFAULT_KINDS_PATTERN, DEFAULT_KINDS_SIZE, KindCount
from kb_dashboard.models.revision import DEFAULT_INDEX_PREFIX, IndexRevision

DEFAULT_REQUEST_TIMEOUT = 10.0


def validate_positive_timeout(field, value, error):
    # requests/urllib3 refuse a timeout of zero or less on every call
    if value <= 0:
        error(field, "Request timeout must be greater than 0 seconds")


SCHEMA = {
    "dashboard": {
        "type": "dict",
        "nullable": True,
        "schema": {
            "index_prefix": {"type": "string", "required": False, "empty": False},
            "kinds_pattern": {"type": "string", "required": False, "empty": False},
            "kind_field": {"type": "string", "required": False, "empty": False},
            "kinds_size": {"type": "integer", "required": False, "min": 1},
            "request_timeout": {"type": "number", "required": False, "check_with": validate_positive_timeout},
        }
    }
}


@dataclass(frozen=True)
class DashboardSettings:
    index_prefix: str = DEFAULT_INDEX_PREFIX
    kinds_pattern: str = DEFAULT_KINDS_PATTERN
    kind_field: str = DEFAULT_KIND_FIELD
    kinds_size: int = DEFAULT_KINDS_SIZE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_config(cls, config: Optional[Dict]) -> "DashboardSettings":
        config = config or {}
        v = Validator(SCHEMA)
        if not v.validate({"dashboard": config}):
            raise ValueError("Invalid config file for dashboard", v.errors)
        return cls(**config)


class DashboardView(BaseModel):
    """Everything the index page renders, built fresh for each request."""
    indices: List[IndexRevision]
    kinds: List[KindCount]
