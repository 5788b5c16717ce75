"""Core update pipeline subpackage.

This package contains the update orchestrator, the result aggregator with
its retry pass, and the protocols their collaborators implement.
"""

from github_secrets.core.aggregator import ResultAggregator, count_by_outcome, group_by_repository
from github_secrets.core.orchestrator import UpdateOrchestrator, build_targets

__all__ = [
    "ResultAggregator",
    "UpdateOrchestrator",
    "build_targets",
    "count_by_outcome",
    "group_by_repository",
]
