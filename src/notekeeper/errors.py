"""Domain errors that are not tied to an HTTP status at the raise site."""


class UserError(Exception):
    """Base for errors caused by the client's request."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmailAlreadyExistsError(UserError):
    """Signup with an email that is already registered."""

    status_code = 409

    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)
