"""
Events module.

Public reads in calendar order (category, text search, inclusive date range),
an upcoming feed, and admin-only create/update/delete.
"""
