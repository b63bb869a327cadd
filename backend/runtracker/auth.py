"""Current-user resolution for API endpoints."""

from runtracker.core.config import settings


def get_current_user_id() -> str:
    """Return the id every request is scoped to.

    The deployment is single-user, so this is the configured
    DEFAULT_USER_ID. Handlers and storage already take a user id, so a real
    auth layer only has to replace this dependency.
    """
    return settings.default_user_id
