"""Login gate for the chat controller.

A boolean capability switch, not a security boundary: it compares the
submitted pair with the configured one and flips ``logged_in``.
"""

import logging

logger = logging.getLogger(__name__)


class AuthGate:
    """Two-state switch: logged out (initial) and logged in."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password
        self._logged_in = False

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    def login(self, username: str, password: str) -> bool:
        """Log in if the pair matches the configured credentials.

        Args:
            username: Submitted username.
            password: Submitted password.

        Returns:
            True if the pair matched. State is unchanged otherwise.
        """
        if username != self._username or password != self._password:
            logger.info("Login rejected: invalid credentials")
            return False
        self._logged_in = True
        logger.info(f"User {username!r} logged in")
        return True

    def logout(self) -> None:
        self._logged_in = False
        logger.info("User logged out")
