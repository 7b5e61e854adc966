from .exceptions import Unauthenticated


def require_identity(user):
    """
    Return the caller if one was resolved from the session, else raise.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise Unauthenticated()
    return user


def caller_id(user):
    """Stable id of the caller, or None for anonymous requests."""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return user.pk
