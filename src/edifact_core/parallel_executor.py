"""
Parallel executor module for concurrent message processing.

Each message is one unit of work; the parser itself is never split.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Tuple

from .logger import get_logger


class ParallelExecutor:
    """Manages parallel execution of per-message processing tasks."""

    def __init__(self, max_threads: int = 5):
        """
        Initialize parallel executor.

        Args:
            max_threads: Maximum number of concurrent threads
        """
        if max_threads < 1:
            raise ValueError(f"max_threads must be at least 1, got {max_threads}")
        self.max_threads = max_threads
        self.logger = get_logger()

    def process_messages_parallel(
        self,
        messages: Dict[str, str],
        processor_func: Callable[[str], Any]
    ) -> Tuple[Dict[str, Any], Dict[str, Exception]]:
        """
        Process multiple messages in parallel.

        Args:
            messages: Dictionary of message key -> raw EDIFACT text
            processor_func: Function applied to each raw text (e.g. Converter.convert_to_structured)

        Returns:
            (results, errors): key -> result for successes, key -> exception for failures
        """
        results: Dict[str, Any] = {}
        errors: Dict[str, Exception] = {}
        total = len(messages)

        self.logger.info(f"Starting parallel processing of {total} messages with {self.max_threads} threads")

        with ThreadPoolExecutor(max_workers=self.max_threads) as executor:
            future_to_key = {
                executor.submit(processor_func, raw): key
                for key, raw in messages.items()
            }

            completed = 0
            for future in as_completed(future_to_key):
                key = future_to_key[future]
                completed += 1

                try:
                    results[key] = future.result()
                    self.logger.debug(f"Completed message {key} ({completed}/{total})")
                except Exception as e:
                    self.logger.error(f"Message {key} failed: {e}")
                    errors[key] = e

        self.logger.info(f"Parallel processing complete: {len(results)}/{total} messages succeeded")

        return results, errors
