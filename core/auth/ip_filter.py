# webunit/core/auth/ip_filter.py
from typing import Sequence


def matches_filter(address: str, ip_filter: str) -> bool:
    """
    Checks a client address against a single filter.

    A filter is either `*` (everyone), an exact address, or a prefix
    terminated by `*` such as `192.168.0.*`. Only the text before the first
    `*` is compared; anything after it is ignored.
    """
    if ip_filter == "*" or ip_filter == address:
        return True
    pos = ip_filter.find("*")
    if pos == -1:
        return False
    return address[:pos] == ip_filter[:pos]


def is_allowed(address: str, filters: Sequence[str]) -> bool:
    """An empty filter list allows every address."""
    if not filters:
        return True
    return any(matches_filter(address, f) for f in filters)
