"""
Lost & Found module.

- Any signed-in user may post; every post starts in moderation (pending)
- Owners edit/delete/claim their own posts; admins may act on any post
- Admins approve/reject; only approved posts appear in the public feed
"""
