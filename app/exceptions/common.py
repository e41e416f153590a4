class BatchRunnerError(Exception):
    """Fatal condition that stops a run before any request is dispatched."""

    detail: str = "Batch run failed."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


# =============================================================================
# Input errors
# =============================================================================
class SpecFileError(BatchRunnerError):
    detail = "Unable to read request file."


class SpecParseError(BatchRunnerError):
    detail = "Request file is not a valid JSON array of request objects."


# =============================================================================
# HTTP client errors
# =============================================================================
class ClientInitError(BatchRunnerError):
    detail = "Unable to construct HTTP client."


# =============================================================================
# Execution errors
# =============================================================================
class TaskAbortedError(BatchRunnerError):
    detail = "A request task aborted unexpectedly."
