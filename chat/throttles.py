# chat/throttles.py

from rest_framework.throttling import ScopedRateThrottle


class MessageSendThrottle(ScopedRateThrottle):
    """
    Throttle message sending per user per project.

    Scope key: 'chat-send'
    Cache key shape:
      throttle_chat-send_u<user_id>_p<project_id>
    """
    scope = "chat-send"

    def get_cache_key(self, request, view):
        # Only throttle POST (send)
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        project_id = getattr(view, "kwargs", {}).get("project_id") or "unknown"
        return f"throttle_{self.scope}_u{user.id}_p{project_id}"
