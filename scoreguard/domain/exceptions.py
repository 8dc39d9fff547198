"""Domain exceptions

These stay inside the core: use cases translate them into typed
rejections before anything reaches a caller.
"""


class SessionNotFoundError(LookupError):
    """Unknown, swept or already removed session id"""

    state = "not found"

    def __init__(self, session_id: str):
        super().__init__(f"Session {self.state}: {session_id}")
        self.session_id = session_id


class SessionExpiredError(SessionNotFoundError):
    """Session outlived the configured timeout"""

    state = "expired"


class SessionAlreadyConsumedError(Exception):
    """Session has already been evaluated"""

    def __init__(self, session_id: str):
        super().__init__(f"Session already consumed: {session_id}")
        self.session_id = session_id


class ScoreStorageError(Exception):
    """The persistent score store failed"""
