"""Dashboard UI components.

Provides helper functions for rendering dashboard elements:
- Progress bars
- Risk / status icons
- Money and percentage formatting
- Boxes and tables (display-width aware, CJK and emoji count as 2 cells)
"""

import unicodedata
from typing import Optional

from src.engine.models.enums import RiskLevel


def display_width(text: str) -> int:
    """Terminal cell width of a string."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch) or ch == "\ufe0f":
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def pad(text: str, width: int, align: str = "<") -> str:
    """Pad a string to a display width."""
    gap = max(0, width - display_width(text))
    if align == ">":
        return " " * gap + text
    if align == "^":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def truncate(text: str, width: int) -> str:
    """Cut a string to at most width display cells."""
    out = ""
    for ch in text:
        if display_width(out + ch) > width:
            break
        out += ch
    return out


def progress_bar(
    value: float,
    min_val: float,
    max_val: float,
    width: int = 20,
    fill_char: str = "█",
    empty_char: str = "░",
) -> str:
    """Generate a progress bar string.

    Args:
        value: Current value
        min_val: Minimum value (0% fill)
        max_val: Maximum value (100% fill)
        width: Total width of the bar
        fill_char: Character for filled portion
        empty_char: Character for empty portion

    Returns:
        Progress bar string like [███████░░░]

    Example:
        >>> progress_bar(75, 0, 100, 10)
        '[███████░░░]'
    """
    if max_val <= min_val:
        return f"[{empty_char * width}]"

    clamped = max(min_val, min(max_val, value))
    filled = int((clamped - min_val) / (max_val - min_val) * width)
    return f"[{fill_char * filled}{empty_char * (width - filled)}]"


def risk_icon(level: RiskLevel) -> str:
    """Return emoji icon for a risk level: 🟢 low, 🟡 medium, 🔴 high."""
    icons = {
        RiskLevel.LOW: "🟢",
        RiskLevel.MEDIUM: "🟡",
        RiskLevel.HIGH: "🔴",
    }
    return icons.get(level, "⚪")


def risk_level_of(score: float) -> RiskLevel:
    """Bucket a 0-100 risk score."""
    if score < 30:
        return RiskLevel.LOW
    elif score < 60:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def progress_icon(percent: float) -> str:
    """Icon for progress toward the daily target."""
    if percent >= 100:
        return "🎯"
    elif percent >= 50:
        return "🟡"
    return "🔴"


def format_usd(value: Optional[float], decimals: int = 2, signed: bool = False) -> str:
    """Format a dollar amount.

    Example:
        >>> format_usd(1234.5)
        '$1,234.50'
        >>> format_usd(-12, signed=True)
        '-$12.00'
    """
    if value is None:
        return "-"
    sign = ""
    if value < 0:
        sign = "-"
    elif signed:
        sign = "+"
    return f"{sign}${abs(value):,.{decimals}f}"


def format_pct(value: Optional[float], decimals: int = 1, signed: bool = False) -> str:
    """Format a value already expressed in percent (12.5 -> '12.5%')."""
    if value is None:
        return "-"
    if signed:
        return f"{value:+.{decimals}f}%"
    return f"{value:.{decimals}f}%"


def box_title(title: str, width: int = 44) -> str:
    """Create a box title line like "┌─── Title ─────┐"."""
    padding = max(2, width - display_width(title) - 7)
    return f"┌─── {title} {'─' * padding}┐"


def box_line(content: str, width: int = 44) -> str:
    """Create a box content line like "│ content      │"."""
    inner = width - 4
    if display_width(content) > inner:
        content = truncate(content, inner)
    return f"│ {pad(content, inner)} │"


def box_bottom(width: int = 44) -> str:
    """Create a box bottom line."""
    return f"└{'─' * (width - 2)}┘"


def box(title: str, lines: list[str], width: int = 44) -> list[str]:
    """A complete box: title, content lines, bottom."""
    return [box_title(title, width), *(box_line(line, width) for line in lines), box_bottom(width)]


def table_header(columns: list[tuple[str, int]], separator: str = "│") -> str:
    """Create a table header line from (name, width) columns."""
    return separator + separator.join(pad(name, width, "^") for name, width in columns) + separator


def table_separator(columns: list[tuple[str, int]], char: str = "─") -> str:
    """Create a table separator line."""
    return "┼" + "┼".join(char * width for _, width in columns) + "┼"


def _is_numeric(value: str) -> bool:
    return value.lstrip("+-$").replace(",", "").replace(".", "").replace("%", "").isdigit()


def table_row(values: list[str], columns: list[tuple[str, int]], separator: str = "│") -> str:
    """Create a table data row. Numbers are right-aligned, text left-aligned."""
    cells = []
    for i, (_, width) in enumerate(columns):
        val = truncate(values[i] if i < len(values) else "", width)
        cells.append(pad(val, width, ">" if _is_numeric(val) else "<"))
    return separator + separator.join(cells) + separator


def side_by_side(left: list[str], right: list[str], gap: int = 2) -> list[str]:
    """Combine two column layouts side by side."""
    left_width = max((display_width(line) for line in left), default=0)
    rows = max(len(left), len(right))
    result = []
    for i in range(rows):
        left_line = left[i] if i < len(left) else ""
        right_line = right[i] if i < len(right) else ""
        result.append(f"{pad(left_line, left_width)}{' ' * gap}{right_line}".rstrip())
    return result
