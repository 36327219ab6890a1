"""
Dashboard aggregates. Plain counts, read without transactional isolation.
"""
from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from app.campushub.constants import RECENT_ACTIVITY_LIMIT, ROLE_STUDENT
from app.campushub.lifecycle import PENDING
from app.campushub.models import User, owner_summary
from app.campushub.modules.events.models import Event
from app.campushub.modules.feedback.models import Feedback
from app.campushub.modules.lostfound.models import LostAndFound
from app.campushub.modules.notices.models import Notice
from app.campushub.responses import iso


def dashboard_stats(s: Session, user: User) -> dict:
    stats = {
        "totalNotices": s.query(Notice).filter(Notice.is_active.is_(True)).count(),
        "upcomingEvents": s.query(Event).filter(Event.event_date >= date.today()).count(),
    }
    if user.is_admin:
        stats.update(
            {
                "pendingLostFound": s.query(LostAndFound).filter(LostAndFound.status == PENDING).count(),
                "pendingFeedback": s.query(Feedback).filter(Feedback.status == PENDING).count(),
                "totalStudents": s.query(User).filter(User.role == ROLE_STUDENT).count(),
                "totalLostFound": s.query(LostAndFound).count(),
                "totalFeedback": s.query(Feedback).count(),
                "totalEvents": s.query(Event).count(),
            }
        )
    else:
        stats["myLostFound"] = s.query(LostAndFound).filter(LostAndFound.posted_by_user_id == user.id).count()
    return stats


def recent_activity(s: Session, limit: int = RECENT_ACTIVITY_LIMIT) -> dict:
    notices = s.query(Notice).order_by(Notice.created_at.desc(), Notice.id.desc()).limit(limit).all()
    events = s.query(Event).order_by(Event.created_at.desc(), Event.id.desc()).limit(limit).all()
    posts = s.query(LostAndFound).order_by(LostAndFound.created_at.desc(), LostAndFound.id.desc()).limit(limit).all()
    feedback = s.query(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc()).limit(limit).all()

    return {
        "notices": [
            {"id": n.id, "title": n.title, "category": n.category, "createdAt": iso(n.created_at)} for n in notices
        ],
        "events": [
            {"id": e.id, "title": e.title, "date": iso(e.event_date), "createdAt": iso(e.created_at)} for e in events
        ],
        "lostFound": [
            {
                "id": p.id,
                "itemName": p.item_name,
                "type": p.type,
                "status": p.status,
                "postedBy": owner_summary(p.posted_by),
                "createdAt": iso(p.created_at),
            }
            for p in posts
        ],
        "feedback": [
            {
                "id": f.id,
                "subject": f.subject,
                "category": f.category,
                "status": f.status,
                "isAnonymous": f.is_anonymous,
                "createdAt": iso(f.created_at),
            }
            for f in feedback
        ],
    }
