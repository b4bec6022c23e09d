import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml
from cerberus import Validator

from kb_dashboard.models.cluster import Cluster
from kb_dashboard.models.dashboard import DashboardSettings
from kb_dashboard.models.utils import BindAddress, parse_bind, parse_bool

logger = logging.getLogger(__name__)

ENV_PREFIX = "KB_"

SCHEMA = {
    "cluster": {"type": "dict", "required": True},
    "access_token": {"type": "string", "required": False, "nullable": True},
    "bind": {"type": "string", "required": False, "nullable": True},
    "debug": {"type": "boolean", "required": False},
    "dashboard": {"type": "dict", "required": False, "nullable": True},
}

# KB_* variable -> key in the `dashboard` section, and the type it's coerced to
DASHBOARD_ENV_VARS = {
    "INDEX_PREFIX": ("index_prefix", str),
    "KINDS_PATTERN": ("kinds_pattern", str),
    "KIND_FIELD": ("kind_field", str),
    "KINDS_SIZE": ("kinds_size", int),
    "REQUEST_TIMEOUT": ("request_timeout", float),
}


def _getenv(environ: Mapping[str, str], name: str) -> str:
    return environ.get(f"{ENV_PREFIX}{name}", "").strip()


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict:
    """
    Build a config dict, shaped like the YAML config file, from KB_* environment variables.

    Basic auth is only configured when both username and password are set.
    """
    if environ is None:
        environ = os.environ

    cluster: Dict = {"endpoint": _getenv(environ, "ELASTICSEARCH_URL")}
    username = _getenv(environ, "ELASTICSEARCH_USERNAME")
    password = _getenv(environ, "ELASTICSEARCH_PASSWORD")
    if username and password:
        cluster["basic_auth"] = {"username": username, "password": password}
    else:
        cluster["no_auth"] = None

    dashboard = {}
    for name, (key, cast) in DASHBOARD_ENV_VARS.items():
        raw = _getenv(environ, name)
        if not raw:
            continue
        try:
            dashboard[key] = cast(raw)
        except ValueError:
            raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: '{raw}'")

    return {
        "cluster": cluster,
        "access_token": _getenv(environ, "ACCESS_TOKEN"),
        "bind": _getenv(environ, "BIND"),
        "debug": parse_bool(_getenv(environ, "DEBUG")),
        "dashboard": dashboard,
    }


class Environment:
    cluster: Cluster
    access_token: str = ""
    bind: BindAddress
    debug: bool = False
    dashboard: DashboardSettings
    config: Dict

    def __init__(self, config: Optional[Dict] = None, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the environment either from a configuration file or a direct configuration object.

        :param config: Direct configuration object (overrides config_file).
        :param config_file: Path to the YAML config file.
        """
        if isinstance(config, Dict):
            self.config = config
        elif config_file:
            logger.info(f"Loading config file: {config_file}")
            with open(config_file) as f:
                self.config = yaml.safe_load(f)
        else:
            raise ValueError("Either config or config_file must be provided.")

        v = Validator(SCHEMA)
        if not isinstance(self.config, Dict) or not v.validate(self.config):
            errors = v.errors if isinstance(self.config, Dict) else "config must be a mapping"
            logger.error(f"Config validation errors: {errors}")
            raise ValueError("Invalid config file", errors)

        self.cluster = Cluster(config=self.config["cluster"])
        logger.info(f"Cluster initialized: {self.cluster.endpoint}")

        self.access_token = self.config.get("access_token") or ""
        if not self.access_token:
            logger.warning("No access token configured, only requests without an access_token will be accepted")
        self.bind = parse_bind(self.config.get("bind"))
        self.debug = self.config.get("debug", False)
        self.dashboard = DashboardSettings.from_config(self.config.get("dashboard"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Environment":
        return cls(config=config_from_env(environ))
