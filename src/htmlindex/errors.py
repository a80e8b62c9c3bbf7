class MissingArgumentError(TypeError):
    """Raised when a mandatory argument (markers, output) is None."""

    def __init__(self, argument, message=None):
        self.argument = argument
        super().__init__(message or f"{argument} must not be None")
