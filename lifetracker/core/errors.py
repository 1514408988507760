"""Exceptions raised at the input boundary of the tracker."""


class InvalidInputError(ValueError):
    """
    User input rejected before it reaches stored state.

    The message is user-facing; use cases return it in their result
    instead of letting the exception escape.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
