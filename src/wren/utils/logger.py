"""
Component Logger

Colored, component-prefixed logging for the command system. Every module
asks for a logger by component name and gets a thin wrapper over a stdlib
logger under the ``wren.`` namespace; output goes through a single
RichHandler on the root logger.

Usage:
    logger = get_logger("registry")
    logger.key_info("Registered 9 built-in commands")
    logger.debug("Alias 'r' -> reminder")
    logger.success("Note created")
    logger.timing("/tag finished in 1.2 ms")

    # Loggers outside the component color table
    logger = get_logger(name="wren.plugins", color="blue")

Component colors come from ``logging.logging_colors`` in ``config.yml``;
components without an entry are white.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from wren.utils.config import get_config_value

DEFAULT_COLOR = "white"

# kind -> (stdlib level, style, prefix); "{color}" is replaced per component
_KIND_STYLES = {
    "key_info": (logging.INFO, "bold {color}", ""),
    "info": (logging.INFO, "{color}", ""),
    "debug": (logging.DEBUG, "dim {color}", "🔍 "),
    "warning": (logging.WARNING, "bold yellow", "⚠️  "),
    "error": (logging.ERROR, "bold red", "❌ "),
    "success": (logging.INFO, "bold green", "✅ "),
    "timing": (logging.INFO, "bold white", "🕒 "),
}


class ComponentLogger:
    """
    Rich-formatted logger bound to one component.

    Messages are prefixed with the component's title-cased name and wrapped
    in Rich markup for the message kind:

    - key_info: milestones worth seeing at INFO (registry loaded, session start)
    - info / debug: normal and trace output in the component color
    - warning / error: fixed yellow / red regardless of component
    - success / timing: INFO-level results and durations
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = DEFAULT_COLOR):
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _render(self, kind: str, message: str) -> tuple[int, str]:
        level, style, prefix = _KIND_STYLES[kind]
        style = style.format(color=self.color)
        return level, f"[{style}]{prefix}{self.component_name.title()}: {message}[/{style}]"

    def _emit(self, kind: str, message: str, **kwargs) -> None:
        level, text = self._render(kind, message)
        self.base_logger.log(level, text, **kwargs)

    def key_info(self, message: str) -> None:
        self._emit("key_info", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def debug(self, message: str) -> None:
        self._emit("debug", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str, exc_info: bool = False) -> None:
        """Error message, optionally with the active exception's traceback."""
        self._emit("error", message, exc_info=exc_info)

    def exception(self, message: str) -> None:
        """Error message with traceback; call from an ``except`` block."""
        self._emit("error", message, exc_info=True)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def timing(self, message: str) -> None:
        self._emit("timing", message)

    def critical(self, message: str) -> None:
        _, text = self._render("error", message)
        self.base_logger.critical(text)

    def log(self, level: int, message: str, *args, **kwargs) -> None:
        """Unformatted passthrough to the stdlib logger."""
        self.base_logger.log(level, message, *args, **kwargs)

    @property
    def level(self) -> int:
        return self.base_logger.level

    @property
    def name(self) -> str:
        return self.base_logger.name

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _logging_options() -> dict:
    """Handler settings from the ``logging`` config section."""
    try:
        return {
            "level": get_config_value("logging.level", None),
            "rich_tracebacks": get_config_value("logging.rich_tracebacks", True),
            "show_locals": get_config_value("logging.show_traceback_locals", False),
            "show_path": get_config_value("logging.show_full_paths", False),
        }
    except Exception:
        # Broken config file; logging still has to work
        return {"level": None, "rich_tracebacks": True, "show_locals": False, "show_path": False}


def _setup_rich_logging(level: int = logging.INFO) -> None:
    """Install the RichHandler on the root logger once per process."""
    root_logger = logging.getLogger()
    if any(isinstance(handler, RichHandler) for handler in root_logger.handlers):
        return

    root_logger.handlers.clear()
    options = _logging_options()

    configured = options["level"]
    if isinstance(configured, str):
        resolved = logging.getLevelName(configured.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    root_logger.setLevel(level)

    root_logger.addHandler(
        RichHandler(
            console=Console(stderr=True, width=120),
            markup=True,
            rich_tracebacks=options["rich_tracebacks"],
            tracebacks_show_locals=options["show_locals"],
            show_path=options["show_path"],
        )
    )


def get_logger(
    component_name: str = None,
    level: int = logging.INFO,
    *,
    name: str = None,
    color: str = None,
) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name; the stdlib logger is ``wren.<component_name>``
            and the color is looked up in ``logging.logging_colors``
        level: Root level used when ``logging.level`` is not configured
        name: Exact stdlib logger name, bypassing the color table (keyword-only)
        color: Rich color for a ``name``-based logger (keyword-only)

    Raises:
        ValueError: If neither ``component_name`` nor ``name`` is given
    """
    _setup_rich_logging(level)

    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or DEFAULT_COLOR)

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    try:
        color = get_config_value(f"logging.logging_colors.{component_name}") or DEFAULT_COLOR
    except Exception:
        color = DEFAULT_COLOR

    return ComponentLogger(logging.getLogger(f"wren.{component_name}"), component_name, color)
