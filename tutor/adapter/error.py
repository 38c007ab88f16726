"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class PublishError(AdapterError):
    """One or more event subscribers failed."""

    def __init__(self, failures: list[Exception]):
        self.failures = failures
        super().__init__(
            f"{len(failures)} subscriber(s) failed: "
            + "; ".join(str(f) for f in failures)
        )
