"""
Notices module.

- Public reads of active notices (category + text search, paged, newest first)
- Admin-only create/update/delete, last write wins
"""
