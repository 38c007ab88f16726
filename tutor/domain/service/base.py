"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold repositories and settings; they never open sessions or
    commit, the caller's request scope owns the transaction.
    """

    pass
