class SessionNotFoundError(ValueError):
    pass


class SessionStateError(ValueError):
    pass
