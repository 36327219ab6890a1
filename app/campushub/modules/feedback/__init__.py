"""
Feedback module: signed-in users submit (optionally anonymously), admins review and resolve.
"""
