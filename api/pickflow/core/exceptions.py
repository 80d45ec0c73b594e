"""
Core Exceptions

Custom exceptions for the Pickflow service.
"""


class GitPreconditionError(Exception):
    """
    Raised when a git workflow cannot start.

    Used by the workflow controllers when a step that must succeed before
    any state is mutated fails, e.g. reading the current branch or checking
    out the target branch. Routers translate it to a 500 response carrying
    the message.
    """

    def __init__(self, message: str, stderr: str = ""):
        self.message = message
        self.stderr = stderr
        super().__init__(self.message)
