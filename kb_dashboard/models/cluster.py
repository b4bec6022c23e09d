from typing import Any, Dict, NamedTuple, Optional
from enum import Enum
import logging

from cerberus import Validator
import requests
import requests.auth
from requests.auth import HTTPBasicAuth

requests.packages.urllib3.disable_warnings()  # ignore: type

logger = logging.getLogger(__name__)

AuthMethod = Enum("AuthMethod", ["NO_AUTH", "BASIC_AUTH"])
HttpMethod = Enum("HttpMethod", ["GET", "POST"])


NO_AUTH_SCHEMA = {
    "nullable": True,
}


def validate_single_auth_method(field, value, error):
    auth_methods = {auth.name.lower() for auth in AuthMethod}
    found = auth_methods.intersection(value.keys())
    if len(found) > 1:
        error(field, f"More than one auth method is present: {sorted(found)}")
    elif not found:
        error(field, f"No auth method is present from: {sorted(auth_methods)}")


def validate_basic_auth_options(field, value, error):
    username = value.get("username")
    password = value.get("password")

    if username is None or password is None:
        error(field, "Must provide both username and password")
    elif username == "" or password == "":
        error(field, "Both username and password must be non-empty")


BASIC_AUTH_SCHEMA = {
    "type": "dict",
    "schema": {
        "username": {
            "type": "string",
            "required": False,
        },
        "password": {
            "type": "string",
            "required": False,
        },
    },
    "check_with": validate_basic_auth_options
}

SCHEMA = {
    "cluster": {
        "type": "dict",
        "schema": {
            "endpoint": {"type": "string", "required": True, "empty": False},
            "allow_insecure": {"type": "boolean", "required": False},
            "no_auth": NO_AUTH_SCHEMA,
            "basic_auth": BASIC_AUTH_SCHEMA,
        },
        "check_with": validate_single_auth_method
    }
}


class AuthDetails(NamedTuple):
    username: str
    password: str


class Cluster:
    """
    The elasticsearch or opensearch cluster holding the revisioned indices.
    """

    config: Dict
    endpoint: str = ""
    auth_type: Optional[AuthMethod] = None
    auth_details: Optional[Dict[str, Any]] = None
    allow_insecure: bool = False

    def __init__(self, config: Dict) -> None:
        v = Validator(SCHEMA)
        if not v.validate({'cluster': config}):
            raise ValueError("Invalid config file for cluster", v.errors)
        logger.info(f"Initializing cluster with endpoint: {config['endpoint']}")

        self.config = config
        self.endpoint = config["endpoint"].rstrip("/")
        self.allow_insecure = config.get("allow_insecure", False) if self.endpoint.startswith(
            "https") else config.get("allow_insecure", True)
        if 'no_auth' in config:
            self.auth_type = AuthMethod.NO_AUTH
        elif 'basic_auth' in config:
            self.auth_type = AuthMethod.BASIC_AUTH
            self.auth_details = config["basic_auth"]

    def __repr__(self) -> str:
        return f"Cluster(endpoint={self.endpoint!r}, auth_type={self.auth_type.name if self.auth_type else None})"

    def get_basic_auth_details(self) -> AuthDetails:
        assert self.auth_type == AuthMethod.BASIC_AUTH
        assert self.auth_details is not None  # for mypy's sake
        return AuthDetails(username=self.auth_details["username"], password=self.auth_details["password"])

    def _generate_auth_object(self) -> requests.auth.AuthBase | None:
        if self.auth_type == AuthMethod.BASIC_AUTH:
            auth_details = self.get_basic_auth_details()
            return HTTPBasicAuth(auth_details.username, auth_details.password)
        elif self.auth_type is AuthMethod.NO_AUTH:
            return None
        raise NotImplementedError(f"Auth type {self.auth_type} not implemented")

    def call_api(self, path, method: HttpMethod = HttpMethod.GET, data=None, headers=None,
                 timeout=None, session=None, raise_error=True, **kwargs) -> requests.Response:
        """
        Calls an API on the cluster.
        """
        if session is None:
            session = requests.Session()

        auth = self._generate_auth_object()

        params = kwargs.get('params', {})

        r = session.request(
            method.name,
            f"{self.endpoint}{path}",
            verify=(not self.allow_insecure),
            params=params,
            auth=auth,
            data=data,
            headers=headers,
            timeout=timeout
        )
        logger.info(f"call_api request {method.name} {self.endpoint}{path}, response: {r.status_code} {r.text[:1000]}")
        if raise_error:
            r.raise_for_status()
        return r
