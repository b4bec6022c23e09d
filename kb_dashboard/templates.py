import logging
import threading
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

logger = logging.getLogger(__name__)

VIEWS_DIR = Path(__file__).parent / "views"
INDEX_TEMPLATE = "index.html.j2"


def format_count(value: int) -> str:
    """1234567 -> '1,234,567'"""
    return f"{value:,}"


class TemplateRenderer:
    """
    Renders the dashboard's Jinja2 templates.

    Outside debug mode the environment is built once and compiled templates are cached.
    In debug mode the environment is rebuilt on every render so template edits show up
    without a restart; the rebuild happens under a lock since renders run on the
    request threadpool.
    """

    def __init__(self, template_dir: Union[str, Path] = VIEWS_DIR, debug: bool = False) -> None:
        self.template_dir = Path(template_dir)
        self.debug = debug
        self._env: Optional[Environment] = None
        self._lock = threading.Lock()

    def _build_environment(self) -> Environment:
        logger.debug(f"Loading templates from {self.template_dir}")
        env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "j2"]),
            auto_reload=False,
        )
        env.filters['format_count'] = format_count
        return env

    def get_template(self, name: str) -> Template:
        with self._lock:
            if self._env is None or self.debug:
                self._env = self._build_environment()
            return self._env.get_template(name)

    def render(self, name: str, **context) -> str:
        return self.get_template(name).render(**context)
