"""Errors raised by the coworker registry and session dispatcher.

Tools translate these into ``Error: ...`` text; they never reach the host.
"""


class CoworkerError(RuntimeError):
    """Base class for coworker registry failures."""


class CoworkerExistsError(CoworkerError):
    """Raised when creating a coworker whose normalized name is taken."""

    def __init__(self, name: str, session_id: str):
        self.name = name
        self.session_id = session_id
        super().__init__(f'Coworker "{name}" already exists with session {session_id}')


class CoworkerNotFoundError(CoworkerError):
    """Raised when operating on a name that is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'Coworker "{name}" not found. Use list_coworkers to see available coworkers.'
        )


class UpstreamError(CoworkerError):
    """Raised when the session service fails or returns no identifier."""
