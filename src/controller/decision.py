"""Which session operation the controller should run after a state change."""

from enum import Enum


class SessionAction(str, Enum):
    """Session operation selected by ``decide_session_action``."""

    NOOP = "noop"
    ACQUIRE = "acquire"
    RESUME = "resume"


def decide_session_action(
    logged_in: bool,
    current_session_id: str | None,
    target_session_id: str | None = None,
) -> SessionAction:
    """Pick the session operation for the current login and session status.

    Pure function, evaluated after every intent that changes the login status
    or the current session id.

    Args:
        logged_in: Whether the login gate is open.
        current_session_id: Session the conversation is attached to, if any.
        target_session_id: Session the user asked to switch to, if any.

    Returns:
        NOOP while logged out, RESUME when a different session was requested,
        ACQUIRE when there is no session, NOOP otherwise.
    """
    if not logged_in:
        return SessionAction.NOOP
    if target_session_id is not None and target_session_id != current_session_id:
        return SessionAction.RESUME
    if current_session_id is None:
        return SessionAction.ACQUIRE
    return SessionAction.NOOP
