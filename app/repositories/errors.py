"""Repository errors."""


class PersistenceFailure(Exception):
    """A write could not be completed; the transaction was rolled back."""

    def __init__(self, message: str = "Persistence failed"):
        self.message = message
        super().__init__(self.message)
