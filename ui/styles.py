from rich.style import Style
from rich.text import Text

SPANISH_RED = "#C60B1E"
SPANISH_GOLD = "#FFC400"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#E74C3C"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"


def get_percentage_style(percentage: int) -> Style:
    """Get color style based on the score percentage."""
    if percentage >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif percentage >= 50:
        return Style(color=SPANISH_GOLD, bold=True)
    else:
        return Style(color=ERROR_RED, bold=True)


def create_welcome_banner() -> Text:
    """Create the welcome banner text."""
    banner = Text()
    banner.append(
        "╔═══════════════════════════════════════════╗\n", Style(color=SPANISH_RED)
    )
    banner.append(
        "║        ¡ A P R E N D E   E S P A Ñ O L !  ║\n",
        Style(color=SPANISH_GOLD, bold=True),
    )
    banner.append(
        "║              Spanish Tutor                ║\n", Style(color=SPANISH_RED)
    )
    banner.append(
        "╚═══════════════════════════════════════════╝", Style(color=SPANISH_RED)
    )
    return banner


def create_success_header() -> Text:
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("¡Correcto!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_error_header() -> Text:
    header = Text()
    header.append("✗ ", Style(color=ERROR_RED, bold=True))
    header.append("Incorrecto", Style(color=ERROR_RED, bold=True))
    return header
