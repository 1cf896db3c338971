"""Colors and named styles for Wren's terminal output.

Everything the CLI prints refers to semantic style names (``success``,
``command``, ``accent``...) registered in a Rich theme, never to raw colors.
The palette behind those names is a :class:`ColorTheme`, selected by
``cli.theme`` in ``config.yml``.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from wren.utils.logger import get_logger

logger = get_logger("cli")


# ============================================================================
# PALETTES
# ============================================================================


@dataclass
class ColorTheme:
    """Palette for one CLI theme.

    Status colors (``error``, ``warning``) are shared by every theme. The
    per-category colors tint command names in the completion menu.
    """

    error: str = "#ff5f5f"
    warning: str = "#ffaa00"
    success: str = "#6b8e23"
    info: str = "#87ceeb"

    header: str = "#b8860b"
    text: str = "#ffffff"
    text_dim: str = "#777777"
    border: str = "#555555"

    note: str = "#8fbc8f"
    notebook: str = "#87ceeb"
    tag: str = "#d2b48c"
    search: str = "#c9a0dc"
    utility: str = "#ffffff"

    def category_color(self, category: str) -> str:
        """Color for a command category value, ``text`` when it has none."""
        return getattr(self, category) if category in _CATEGORY_FIELDS else self.text


_CATEGORY_FIELDS = ("note", "notebook", "tag", "search", "utility")

DEFAULT_THEME = ColorTheme()

DUSK_THEME = ColorTheme(
    success="#a2ae9d",
    info="#9988a1",
    header="#9988a1",
    note="#a2ae9d",
    notebook="#9988a1",
    tag="#f0b8b8",
    search="#c75f71",
)

THEME_REGISTRY = {
    "default": DEFAULT_THEME,
    "dusk": DUSK_THEME,
}

_active_theme = DEFAULT_THEME


def get_active_theme() -> ColorTheme:
    return _active_theme


def _build_rich_theme(theme: ColorTheme) -> Theme:
    """Map the semantic style names onto ``theme``'s palette."""
    return Theme(
        {
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "info": theme.info,
            "header": f"bold {theme.header}",
            "primary": theme.text,
            "dim": theme.text_dim,
            "border": theme.border,
            "command": theme.note,
            "accent": theme.tag,
        }
    )


def set_theme(theme: ColorTheme) -> None:
    """Activate ``theme`` and replace the module-level console."""
    global _active_theme, console
    _active_theme = theme
    console = Console(theme=_build_rich_theme(theme))


def load_theme_from_config(config_path: str | None = None) -> ColorTheme:
    from wren.utils.config import get_config_value

    theme_name = get_config_value("cli.theme", "default", config_path)
    if theme_name not in THEME_REGISTRY:
        logger.warning(f"Unknown theme '{theme_name}', using default")
        return DEFAULT_THEME
    return THEME_REGISTRY[theme_name]


def initialize_theme_from_config(config_path: str | None = None) -> None:
    """Apply the configured theme at CLI startup."""
    try:
        set_theme(load_theme_from_config(config_path))
    except (OSError, ValueError) as e:
        logger.debug(f"Theme not loaded ({e}), using default")
        set_theme(DEFAULT_THEME)


console = Console(theme=_build_rich_theme(_active_theme))


# ============================================================================
# STYLE NAMES
# ============================================================================


class Styles:
    """Style names registered by :func:`_build_rich_theme`."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    HEADER = "header"
    PRIMARY = "primary"
    DIM = "dim"
    BORDER = "border"

    COMMAND = "command"
    ACCENT = "accent"


class Messages:
    """Markup wrappers for one-line status output."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def info(text: str) -> str:
        return f"[info]{text}[/info]"
