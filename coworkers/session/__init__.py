"""Session service boundary."""

from coworkers.session.dispatcher import Dispatcher, HttpSessionService, SessionService

__all__ = ["Dispatcher", "HttpSessionService", "SessionService"]
