class InvalidCubeException(Exception):
    """ Exception raised when a layout does not describe a real cube """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

class UnsolvableCubeException(Exception):
    """ Exception raised when a cube is not reachable from the solved cube """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

class SolutionTooLongException(Exception):
    """ Exception raised when a solution walks past god's number """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

class QueueOverflowException(Exception):
    """ Exception raised when the search frontier outgrows its queue """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

class CorruptTableException(Exception):
    """ Exception raised when a state table is truncated or inconsistent """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
