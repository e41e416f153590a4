import asyncio
import logging
from collections.abc import AsyncGenerator, Callable, Sequence

from exceptions import TaskAbortedError
from schemas.batch import RequestResult, RequestSpec, TestSummary
from services.aggregator import summarize
from services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

ResultCallback = Callable[[int, int, RequestResult], None]


class BatchRunner:
    """
    Runs every spec of a batch concurrently against one shared client.

    Results are handed out in completion order with a 1-based arrival index.
    When ``max_concurrency`` is set a semaphore bounds the requests in
    flight; otherwise all of them start at once.
    """

    def __init__(self, dispatcher: Dispatcher, max_concurrency: int | None = None):
        self._dispatcher = dispatcher
        self._max_concurrency = max_concurrency

    async def iter_results(
        self, specs: Sequence[RequestSpec]
    ) -> AsyncGenerator[tuple[int, RequestResult], None]:
        semaphore = asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None

        async def _run(spec: RequestSpec) -> RequestResult:
            if semaphore is None:
                return await self._dispatcher.dispatch(spec)
            async with semaphore:
                return await self._dispatcher.dispatch(spec)

        tasks = [asyncio.create_task(_run(spec)) for spec in specs]
        try:
            for index, next_done in enumerate(asyncio.as_completed(tasks), start=1):
                try:
                    result = await next_done
                except Exception as e:
                    logger.exception("Request task aborted")
                    raise TaskAbortedError(f"Request task aborted: {e}") from e
                yield index, result
        finally:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def run(
        self,
        specs: Sequence[RequestSpec],
        on_result: ResultCallback | None = None,
    ) -> TestSummary:
        results: list[RequestResult] = []
        total = len(specs)
        async for index, result in self.iter_results(specs):
            if on_result:
                on_result(index, total, result)
            results.append(result)
        summary = summarize(results, total=total)
        logger.info(
            f"Batch finished: {summary.success}/{summary.total} succeeded "
            f"({summary.success_rate:.1f}%)"
        )
        return summary
