"""Result aggregation and the retry pass.

This module tallies and groups UpdateResults and drives the single retry
pass over failed pairs. A retry result replaces the earlier result for the
same pair instead of being appended next to it.
"""

from icecream import ic

from github_secrets import console
from github_secrets.core.interfaces import ConfirmationOracle
from github_secrets.core.orchestrator import UpdateOrchestrator
from github_secrets.models import Repository, UpdateResult, UpdateTarget


def count_by_outcome(results: list[UpdateResult]) -> tuple[int, int]:
    """Return ``(success_count, failure_count)``."""
    successes = sum(1 for result in results if result.success)
    return successes, len(results) - successes


def group_by_repository(results: list[UpdateResult]) -> dict[str, list[UpdateResult]]:
    """Group results by repository display name.

    Both the groups and their members keep first-seen order.
    """
    groups: dict[str, list[UpdateResult]] = {}
    for result in results:
        groups.setdefault(result.repository, []).append(result)
    return groups


class ResultAggregator:
    """Collects the results of a run and retries its failures once.

    Attributes:
        orchestrator: Runs the retry pass.
        oracle: Asked whether to retry.
        retry_declined: Whether pairs the user declined to overwrite are
            retried along with real failures.

    """

    def __init__(
        self,
        orchestrator: UpdateOrchestrator,
        oracle: ConfirmationOracle,
        *,
        retry_declined: bool = False,
    ) -> None:
        self.orchestrator = orchestrator
        self.oracle = oracle
        self.retry_declined = retry_declined
        self._targets: list[UpdateTarget] = []
        self._results: list[UpdateResult] = []
        self._retried = False

    def __repr__(self) -> str:
        successes, failures = count_by_outcome(self._results)
        return f"ResultAggregator(successes={successes}, failures={failures}, retried={self._retried})"

    @property
    def results(self) -> list[UpdateResult]:
        return list(self._results)

    @property
    def retried(self) -> bool:
        return self._retried

    def record(self, targets: list[UpdateTarget], results: list[UpdateResult]) -> None:
        """Append the results of a pass.

        Args:
            targets: The pairs that were processed.
            results: Their results, aligned with ``targets``.

        Raises:
            ValueError: If the two lists differ in length.

        """
        if len(targets) != len(results):
            raise ValueError(f"Got {len(results)} results for {len(targets)} targets")
        self._targets.extend(targets)
        self._results.extend(results)

    def count_by_outcome(self) -> tuple[int, int]:
        return count_by_outcome(self._results)

    def group_by_repository(self) -> dict[str, list[UpdateResult]]:
        return group_by_repository(self._results)

    def failures(self) -> list[UpdateResult]:
        return [result for result in self._results if not result.success]

    def _retry_positions(self) -> dict[tuple[Repository, str], int]:
        """Map each retry-eligible pair to the position of its latest result."""
        positions: dict[tuple[Repository, str], int] = {}
        for index, (target, result) in enumerate(zip(self._targets, self._results, strict=True)):
            key = (target.repository, target.secret.key)
            if result.success or (result.declined and not self.retry_declined):
                positions.pop(key, None)
                continue
            positions[key] = index
        return positions

    def retry_candidates(self) -> list[UpdateTarget]:
        """Return the failed pairs a retry would attempt, in result order."""
        return [self._targets[index] for index in sorted(self._retry_positions().values())]

    async def retry_failed(self) -> list[UpdateResult]:
        """Offer one retry of the failed pairs and run it if accepted.

        The retry writes each secret directly, without the existence check
        or overwrite prompt. Only one retry pass is ever made.

        Returns:
            The retry pass results, or an empty list if nothing was retried.

        """
        if self._retried:
            return []

        positions = self._retry_positions()
        if not positions:
            return []
        if not await self.oracle.confirm_retry():
            return []

        self._retried = True
        indices = sorted(positions.values())
        targets = [self._targets[index] for index in indices]
        ic(len(targets))

        console.newline()
        console.action(f"Retrying {len(targets)} failed operation(s)...")
        retry_results = await self.orchestrator.process(targets, check_existing=False)

        for index, result in zip(indices, retry_results, strict=True):
            self._results[index] = result
        return retry_results
