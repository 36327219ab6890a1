from datetime import datetime, timezone

from flask import Blueprint

from app.campushub.responses import ok

bp = Blueprint("routes", __name__)


@bp.get("/")
def index():
    return ok("API is running", {"timestamp": datetime.now(timezone.utc).isoformat()})


@bp.get("/health")
def health():
    """Liveness check. No DB access."""
    return ok("API is running", {"timestamp": datetime.now(timezone.utc).isoformat()})
