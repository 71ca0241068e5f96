# core/utils.py

"""
Repository for program-wide utilities.
"""

import unicodedata
import uuid
from typing import Any


def generate_uuid() -> str:
    return str(uuid.uuid4())


def name_sort_key(name: str) -> tuple[str, str]:
    """
    Builds a locale-insensitive alphabetical sort key for Portuguese names.

    Accents are folded so that "Ângela" sorts beside "Ana" rather than after "Zé",
    and the casefolded original breaks ties between names that fold identically.
    """
    folded = unicodedata.normalize("NFKD", name.casefold())
    folded = "".join(c for c in folded if not unicodedata.combining(c))

    return (folded, name.casefold())


def validate_text_input(value: Any, field_name: str) -> str:
    """
    Ensures a record field holds a string.

    Raises:
        TypeError: If the value is not a `str`. None is rejected too; optional text fields
            default None to "" before calling this.
    """
    if not isinstance(value, str):
        raise TypeError(
            f"Invalid input. {field_name} must be a string, got {type(value).__name__}."
        )

    return value


def optional_field(data: dict, key: str, default: Any) -> Any:
    """Returns `data[key]`, or `default` when the key is missing or null."""
    value = data.get(key)
    return default if value is None else value
