import logging
import sys
import pytest

from kb_dashboard.environment import Environment
from kb_dashboard.models.cluster import Cluster

CLUSTER_ENDPOINT = "http://elasticsearch:9200"
ACCESS_TOKEN = "s3cret-Token"


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging to a clean state before each test."""
    root_logger = logging.getLogger()
    # Clear all handlers
    root_logger.handlers.clear()
    # Add a fresh stderr handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield


@pytest.fixture
def cluster():
    return Cluster({"endpoint": CLUSTER_ENDPOINT, "no_auth": None})


@pytest.fixture
def env_config():
    return {
        "cluster": {
            "endpoint": CLUSTER_ENDPOINT,
            "basic_auth": {"username": "elastic", "password": "changeme"},
        },
        "access_token": ACCESS_TOKEN,
        "bind": "127.0.0.1:8081",
    }


@pytest.fixture
def env(env_config):
    return Environment(config=env_config)
