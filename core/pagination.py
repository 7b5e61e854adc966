from django.conf import settings

from .exceptions import InvalidArgument


def parse_limit(request, kind):
    """
    Read ?limit= for a list endpoint.

    Defaults per list kind come from COLLAB_PAGE_LIMITS; values are clamped
    to COLLAB_MAX_PAGE_LIMIT.
    """
    default = settings.COLLAB_PAGE_LIMITS[kind]
    raw = request.query_params.get("limit")
    if raw in (None, ""):
        return default

    try:
        limit = int(raw)
    except (TypeError, ValueError):
        raise InvalidArgument("limit must be a positive integer.")

    if limit < 1:
        raise InvalidArgument("limit must be a positive integer.")

    return min(limit, settings.COLLAB_MAX_PAGE_LIMIT)


def parse_flag(request, name) -> bool:
    value = request.query_params.get(name)
    return bool(value) and value.lower() in ("1", "true", "yes")
