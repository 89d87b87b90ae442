# web_resource_checker/exceptions.py


class WebResourceCheckerError(Exception):
    """
    Base class for errors raised by the web resource checker.
    """


class TargetUnreachableError(WebResourceCheckerError):
    """
    Raised when the target as a whole cannot be read, as opposed to one or
    more of its files being missing or non-compliant.

    Args:
        target: The target path or URL that could not be reached.
        cause: Description of the underlying failure.
    """

    def __init__(self, target: str, cause: str) -> None:
        super().__init__(f"Target {target} is unreachable: {cause}")
        self.target = target
        self.cause = cause
