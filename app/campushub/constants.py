"""
Central constants for the Campus Hub API.
"""
from __future__ import annotations

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = frozenset({ROLE_STUDENT, ROLE_ADMIN})

NOTICE_CATEGORIES = ("Academic", "Events", "General", "Urgent", "Exam")
EVENT_CATEGORIES = ("Cultural", "Technical", "Sports", "Workshop", "Seminar")
LOST_FOUND_CATEGORIES = ("Electronics", "Documents", "Accessories", "Books", "Other")
FEEDBACK_CATEGORIES = ("Facilities", "Services", "Academic", "Infrastructure", "Other")

LOST_FOUND_TYPES = ("lost", "found")

# Paging
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
UPCOMING_EVENTS_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 5

DEFAULT_ADMIN_DEPARTMENT = "Administration"
