"""
Route and location matching rules.
"""


def route_matches(a: str, b: str) -> bool:
    """Equal, or either route contains the other."""
    return a == b or a in b or b in a


def location_matches(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction."""
    a, b = a.lower(), b.lower()
    return a in b or b in a
