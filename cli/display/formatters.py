"""
Display formatting utilities for CLI output.

Provides bar graphics and hex formatting helpers.
"""


def value_bar(
    value: int,
    max_value: int = 100,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
) -> str:
    """
    Create a text-based bar graphic with value.

    Args:
        value: Current value
        max_value: Maximum value (default 100 for NBS volumes)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value

    Returns:
        Formatted string like " 70 [███████░░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)

    if show_value:
        return f"{value:3d} [{bar}]"
    return f"[{bar}]"


def pan_bar(
    pan: int,
    width: int = 11,
    left_char: str = "◀",
    right_char: str = "▶",
    center_char: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered pan bar graphic.

    NBS panning runs 0-200 with 100 as center.

    Returns:
        Formatted string like "L 50 [──◀──●─────]"
    """
    center = width // 2
    bar = list(empty_char * width)
    bar[center] = center_char

    if pan == 100:
        position_str = "  C"
    elif pan < 100:
        amount = 100 - pan
        pos = max(0, center - int((amount / 100) * center))
        bar[pos] = left_char
        position_str = f"L{amount:2d}"
    else:
        amount = pan - 100
        pos = min(width - 1, center + int((amount / 100) * (width - center - 1)))
        bar[pos] = right_char
        position_str = f"R{amount:2d}"

    return f"{position_str} [{''.join(bar)}]"


def hex_bytes(data: bytes, limit: int = 16) -> str:
    """Format bytes as space separated hex, eliding after `limit` bytes."""
    text = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        text += " …"
    return text
