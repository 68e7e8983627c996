import logging

_logger: logging.Logger = logging.getLogger(__name__)

FALLBACK_LABEL = " "


def synthesize_label(index: int | None, icons: list[str]) -> str:
    """Build the workspace label from its number and the icons of its windows.

    "1: a b " with icons, "1" without any, and a single space if the number is
    unknown.
    """

    if index is None:
        _logger.error(f"Could not fetch workspace num for icons: {icons}")
        return FALLBACK_LABEL

    icon_str: str = " ".join(icons)
    if len(icon_str) > 0:
        icon_str += " "
        return f"{index}: {icon_str}"

    return f"{index}"
