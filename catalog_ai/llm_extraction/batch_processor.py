"""
Batch Dispatcher for LLM Extraction
Runs items through a worker in fixed-size concurrent groups, pausing between
groups to keep the request rate on the inference service down.
"""

import logging
import time
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence

from ..models.game_model import BatchResult, FailureEntry, GameRecord

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
Worker = Callable[[str, int], GameRecord]


class BatchDispatcher:
    """Process a list of items in groups with bounded concurrency."""

    def __init__(
        self,
        worker: Worker,
        batch_size: int,
        inter_batch_delay: float,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            worker: Callable (item, index) -> GameRecord, raising on failure
            batch_size: Number of items dispatched concurrently per group
            inter_batch_delay: Seconds to pause between groups
            sleep: Sleep function, replaceable in tests
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if inter_batch_delay < 0:
            raise ValueError("inter_batch_delay must be non-negative")

        self.worker = worker
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self._sleep = sleep

    def partition(self, items: Sequence[str]) -> List[List[int]]:
        """Split item positions into consecutive groups of at most batch_size."""
        return [
            list(range(start, min(start + self.batch_size, len(items))))
            for start in range(0, len(items), self.batch_size)
        ]

    def dispatch(
        self,
        items: Sequence[str],
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> BatchResult:
        """Run every item through the worker and collect the outcomes.

        Args:
            items: Item descriptions to process
            on_progress: Called with (processed, total) after every item
            cancel_event: If set, stops the run at the next group boundary

        Returns:
            BatchResult with one outcome per processed item
        """
        result = BatchResult(total=len(items))
        if not items:
            return result

        lock = threading.Lock()

        def run_unit(index: int) -> None:
            item = items[index]
            record = None
            failure = None
            try:
                record = self.worker(item, index)
                logger.debug(f"Processed item {index}: {str(item)[:50]}")
            except Exception as e:
                logger.error(f"Failed to process item {index} ({str(item)[:50]}...): {e}")
                failure = FailureEntry(input=item, error=str(e) or type(e).__name__, index=index)

            with lock:
                if failure is None:
                    result.success.append(record)
                else:
                    result.failed.append(failure)
                result.processed += 1
                if on_progress:
                    on_progress(result.processed, result.total)

        groups = self.partition(items)
        logger.info(f"Dispatching {len(items)} items in {len(groups)} batch(es) of up to {self.batch_size}")

        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for group_number, group in enumerate(groups, start=1):
                futures = [executor.submit(run_unit, index) for index in group]
                wait(futures)

                logger.info(f"Batch {group_number}/{len(groups)} complete: {result.processed}/{result.total} processed")

                if group_number < len(groups):
                    if cancel_event is not None and cancel_event.is_set():
                        logger.warning(f"Cancelled after batch {group_number}, {result.total - result.processed} items skipped")
                        result.cancelled = True
                        break
                    self._sleep(self.inter_batch_delay)

        logger.info(f"Batch run finished: {len(result.success)} succeeded, {len(result.failed)} failed")
        return result
