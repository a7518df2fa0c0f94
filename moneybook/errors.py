class ValidationError(Exception):
    """Raised when user input cannot be turned into a ledger change.

    The store is left untouched whenever this is raised, so the caller can
    show `message` and let the user retry.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
