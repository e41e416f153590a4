from collections.abc import Sequence

from schemas.batch import RequestResult, TestSummary


def success_rate(success: int, total: int) -> float:
    if total == 0:
        return 0.0
    return success / total * 100


def summarize(results: Sequence[RequestResult], total: int | None = None) -> TestSummary:
    """
    Reduce completed results into a summary.

    Args:
        results: Results in arrival order
        total: Number of requests in the batch, defaults to ``len(results)``
    """
    if total is None:
        total = len(results)
    success = sum(1 for r in results if r.success)
    return TestSummary(
        total=total,
        success=success,
        failed=total - success,
        success_rate=success_rate(success, total),
        results=list(results),
    )
