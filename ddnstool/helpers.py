from typing import List, Optional


def parse_flag(value: Optional[str], default: bool = False) -> bool:
    """Interpret a query-string flag; only the literal string "true" is truthy.

    A missing value falls back to `default`.
    """
    if value is None:
        return default
    return value == "true"


def split_domains(value: Optional[str]) -> List[str]:
    """Split a comma-separated domain list, dropping blanks and whitespace.

    Order and duplicates are kept; each entry is reconciled on its own.
    """
    if not value:
        return []
    return [d.strip() for d in value.split(',') if d.strip()]
