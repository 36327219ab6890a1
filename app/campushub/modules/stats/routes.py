from flask import Blueprint

from app.campushub.db import db_session
from app.campushub.modules.stats.service import dashboard_stats, recent_activity
from app.campushub.rbac import current_user, require_admin, require_auth
from app.campushub.responses import ok

bp = Blueprint("stats", __name__)


@bp.get("")
@require_auth
def stats_dashboard():
    """Counts for the dashboard; admins get the moderation backlog, students their own posts."""
    return ok("Statistics retrieved successfully", dashboard_stats(db_session(), current_user()))


@bp.get("/activity")
@require_admin
def stats_activity():
    return ok("Recent activity retrieved successfully", recent_activity(db_session()))
