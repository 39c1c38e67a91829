"""Request-scoped access to the leaderboard service."""

from fastapi import HTTPException, Request

from leaderboard.services import LeaderboardService

SERVICE_STATE_KEY = "leaderboard_service"


def attach_leaderboard_service(app_state, service: LeaderboardService) -> None:
    """Make a service available to route handlers through ``app.state``."""
    setattr(app_state, SERVICE_STATE_KEY, service)


def get_leaderboard_service(request: Request) -> LeaderboardService:
    """Resolve the service owned by the application handling this request."""
    service = getattr(request.app.state, SERVICE_STATE_KEY, None)
    if service is None:
        # Lifespan has not run, e.g. the app was mounted without startup
        raise HTTPException(status_code=503, detail="Leaderboard service is not ready")
    return service
