from typing import Any, Dict, Iterable, Optional

# assignment fields copied from an asset into a transfer record
ASSIGNMENT_FIELDS = (
    "owner_fullname",
    "hostname",
    "p_number",
    "cadre",
    "department",
    "section",
    "building",
)

# omitted on a transfer means "keep what the asset has"
CARRY_FORWARD_FIELDS = ("hostname", "p_number", "section", "building")


def effective_value(new: Optional[Any], existing: Optional[Any]) -> Optional[Any]:
    if new is None:
        return existing
    if isinstance(new, str) and not new.strip():
        return existing
    return new


def merge_assignment(
    requested: Dict[str, Any],
    current: Dict[str, Any],
    carry_forward: Iterable[str] = CARRY_FORWARD_FIELDS,
) -> Dict[str, Any]:
    """
    Resolve the assignment values a transfer will apply.

    ``requested`` is keyed by assignment field name (without the ``new_``
    prefix). Fields in ``carry_forward`` fall back to ``current`` when not
    supplied; the others are taken as given.
    """
    carry_forward = set(carry_forward)
    merged = {}
    for field in ASSIGNMENT_FIELDS:
        value = requested.get(field)
        if field in carry_forward:
            value = effective_value(value, current.get(field))
        merged[field] = value
    return merged
