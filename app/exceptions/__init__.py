from .common import (
    BatchRunnerError,
    ClientInitError,
    SpecFileError,
    SpecParseError,
    TaskAbortedError,
)

__all__ = [
    "BatchRunnerError",
    "SpecFileError",
    "SpecParseError",
    "ClientInitError",
    "TaskAbortedError",
]
