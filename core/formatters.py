# core/formatters.py

# pure display helpers shared by reports and the cli
# must never import from models!

import re

# rendered in place of an average when there are no grades to average
NO_DATA = "-"

# rendered in place of a name or subject that cannot be resolved
UNKNOWN = "-"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


# === numeric formatters ===


def format_average(value: float | None, decimals: int = 2) -> str:
    return NO_DATA if value is None else f"{value:.{decimals}f}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_count(value: int) -> str:
    return f"{value:02d}"


# === identity formatters ===


def format_national_id(value: str) -> str:
    """
    Formats a CPF as ###.###.###-##, keeping at most 11 digits and dropping everything else.

    Partial input is formatted as far as it goes, e.g. "1234" -> "123.4".
    """
    digits = re.sub(r"\D", "", value)[:11]

    parts = [digits[0:3], digits[3:6], digits[6:9]]
    head = ".".join(p for p in parts if p)
    tail = digits[9:11]

    return f"{head}-{tail}" if tail else head


def format_portal_link(portal_url: str | None) -> str | None:
    if not portal_url:
        return None

    return portal_url if portal_url.startswith("http") else f"https://{portal_url}"
