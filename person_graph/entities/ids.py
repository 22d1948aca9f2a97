import re
from typing import Any, Iterable, List, Optional

_TRAILING_ID = re.compile(r"/(\d+)/?$")


def extract_id_from_url(url: Optional[str]) -> Optional[int]:
    """Extract the numeric id from a resource url such as ``/people/10/``.

    Returns ``None`` instead of raising when the url has no numeric suffix.
    """
    if not url:
        return None
    match = _TRAILING_ID.search(url)
    return int(match.group(1)) if match else None


def coerce_ids(values: Optional[Iterable[Any]]) -> List[int]:
    """Normalize a list of related resources to integer ids.

    The API returns plain integers; resource urls are accepted as well.
    Entries without a usable id are skipped.
    """
    ids = []
    for value in values or []:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            ids.append(value)
        elif isinstance(value, str):
            if value.isdigit():
                ids.append(int(value))
                continue
            extracted = extract_id_from_url(value)
            if extracted is not None:
                ids.append(extracted)
    return ids
