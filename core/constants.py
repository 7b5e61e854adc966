# core/constants.py

# --- Activity action types (closed registry) ---

# Tasks
ACTIVITY_TASK_CREATED = "task_created"
ACTIVITY_TASK_UPDATED = "task_updated"
ACTIVITY_TASK_COMPLETED = "task_completed"

# Team
ACTIVITY_MEMBER_ADDED = "member_added"
ACTIVITY_MEMBER_REMOVED = "member_removed"

# Decisions
ACTIVITY_POLL_CREATED = "poll_created"

# Content
ACTIVITY_WHITEBOARD_UPDATED = "whiteboard_updated"  # reserved, no producer
ACTIVITY_FILE_UPLOADED = "file_uploaded"

ACTIVITY_CHOICES = [
    (ACTIVITY_TASK_CREATED, "Task created"),
    (ACTIVITY_TASK_UPDATED, "Task updated"),
    (ACTIVITY_TASK_COMPLETED, "Task completed"),
    (ACTIVITY_MEMBER_ADDED, "Member added"),
    (ACTIVITY_MEMBER_REMOVED, "Member removed"),
    (ACTIVITY_POLL_CREATED, "Poll created"),
    (ACTIVITY_WHITEBOARD_UPDATED, "Whiteboard updated"),
    (ACTIVITY_FILE_UPLOADED, "File uploaded"),
]
