"""Tests for core/aggregator.py module."""

import pytest
from fakes import FakeClientFactory, FakePrompt, FakeSecretService

from github_secrets.core.aggregator import ResultAggregator, count_by_outcome, group_by_repository
from github_secrets.core.orchestrator import UpdateOrchestrator, build_targets
from github_secrets.exceptions import GitHubApiError, TransportError
from github_secrets.models import DECLINED_REASON, Repository, SecretPair, UpdateResult

REPO = Repository("o", "r")
SECRET = SecretPair("K", "v")


def result(repository, key, success, error=None, declined=False):
    return UpdateResult(secret_name=key, repository=repository, success=success, error=error, declined=declined)


async def run_pass(services, prompt, limiter, repositories, secrets, *, retry_declined=False):
    """Run a first pass and return the aggregator holding its results."""
    orchestrator = UpdateOrchestrator(
        token="ghp_" + "x" * 36,
        client_factory=FakeClientFactory(services),
        oracle=prompt,
        rate_limiter=limiter,
    )
    aggregator = ResultAggregator(orchestrator, prompt, retry_declined=retry_declined)
    aggregator.record(build_targets(repositories, secrets), await orchestrator.run(repositories, secrets))
    return aggregator


class TestCountAndGroup:
    """Tests for the result tallies."""

    def test_count_empty(self):
        """Test no results count as zero of each."""
        assert count_by_outcome([]) == (0, 0)

    def test_counts_partition_results(self):
        """Test successes and failures add up to the total."""
        results = [result("a", "K1", True), result("a", "K2", False, "x"), result("b", "K1", False, "y")]

        successes, failures = count_by_outcome(results)

        assert (successes, failures) == (1, 2)
        assert successes + failures == len(results)

    def test_group_keeps_first_seen_order(self):
        """Test groups and members keep the order results arrived in."""
        results = [
            result("b", "K1", True),
            result("a", "K1", False, "x"),
            result("b", "K2", True),
            result("a", "K2", True),
        ]

        groups = group_by_repository(results)

        assert list(groups) == ["b", "a"]
        assert [r.secret_name for r in groups["b"]] == ["K1", "K2"]
        assert [r.secret_name for r in groups["a"]] == ["K1", "K2"]
        assert sum(len(group) for group in groups.values()) == len(results)

    @pytest.mark.asyncio
    async def test_aggregator_empty_run(self, fake_limiter):
        """Test a run without secrets aggregates to nothing."""
        prompt = FakePrompt()
        aggregator = await run_pass({}, prompt, fake_limiter, [REPO], [])

        assert aggregator.count_by_outcome() == (0, 0)
        assert aggregator.group_by_repository() == {}
        assert await aggregator.retry_failed() == []
        assert prompt.retry_questions == 0


class TestRecord:
    """Tests for recording pass results."""

    def test_length_mismatch(self, repo_a):
        """Test results must align with their targets."""
        aggregator = ResultAggregator(orchestrator=None, oracle=FakePrompt())

        with pytest.raises(ValueError, match="1 results for 2 targets"):
            aggregator.record(
                build_targets([repo_a], [SecretPair("K1", "1"), SecretPair("K2", "2")]),
                [result("acme/repo-a", "K1", True)],
            )

    def test_results_returns_copy(self):
        """Test callers cannot mutate the aggregated state."""
        aggregator = ResultAggregator(orchestrator=None, oracle=FakePrompt())

        aggregator.results.append(result("a", "K", True))

        assert aggregator.results == []


class TestRetryFailed:
    """Tests for the retry pass."""

    @pytest.mark.asyncio
    async def test_retry_replaces_failure(self, fake_limiter):
        """Test a failure retried successfully ends as a single success."""
        service = FakeSecretService(update_errors={"K": [GitHubApiError(500, "Server Error")]})
        prompt = FakePrompt(retry=True)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])
        assert aggregator.count_by_outcome() == (0, 1)

        retry_results = await aggregator.retry_failed()

        assert retry_results == [result("o/r", "K", True)]
        assert aggregator.results == [result("o/r", "K", True)]
        assert aggregator.count_by_outcome() == (1, 0)
        assert len(service.update_calls) == 2
        assert aggregator.retried is True

    @pytest.mark.asyncio
    async def test_retry_skips_existence_check(self, fake_limiter):
        """Test the retry writes directly without looking the secret up again."""
        service = FakeSecretService(info_errors={"K": TransportError("HTTP error: reset")})
        prompt = FakePrompt(retry=True)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])

        await aggregator.retry_failed()

        assert service.info_calls == ["K"]
        assert service.update_calls == [("K", "v")]
        assert aggregator.count_by_outcome() == (1, 0)

    @pytest.mark.asyncio
    async def test_failed_retry_supersedes_original(self, fake_limiter):
        """Test a retry that fails again replaces the first error."""
        errors = [GitHubApiError(500, "first"), GitHubApiError(503, "second")]
        service = FakeSecretService(update_errors={"K": errors})
        prompt = FakePrompt(retry=True)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])

        await aggregator.retry_failed()

        assert len(aggregator.results) == 1
        assert aggregator.results[0].error == "GitHub API error (status 503): second"

    @pytest.mark.asyncio
    async def test_only_failures_are_retried(self, repo_a, repo_b, fake_limiter):
        """Test successful pairs are not written again."""
        service_a = FakeSecretService(update_errors={"K2": [TransportError("HTTP error: timed out")]})
        service_b = FakeSecretService()
        prompt = FakePrompt(retry=True)
        secrets = [SecretPair("K1", "1"), SecretPair("K2", "2")]
        aggregator = await run_pass(
            {"repo-a": service_a, "repo-b": service_b}, prompt, fake_limiter, [repo_a, repo_b], secrets
        )

        assert [t.secret.key for t in aggregator.retry_candidates()] == ["K2"]
        await aggregator.retry_failed()

        assert service_a.update_calls == [("K1", "1"), ("K2", "2"), ("K2", "2")]
        assert service_b.update_calls == [("K1", "1"), ("K2", "2")]
        assert [r.success for r in aggregator.results] == [True, True, True, True]

    @pytest.mark.asyncio
    async def test_user_declines_retry(self, fake_limiter):
        """Test answering no leaves the results untouched."""
        service = FakeSecretService(update_errors={"K": [GitHubApiError(500, "Server Error")]})
        prompt = FakePrompt(retry=False)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])

        assert await aggregator.retry_failed() == []

        assert prompt.retry_questions == 1
        assert len(service.update_calls) == 1
        assert aggregator.count_by_outcome() == (0, 1)
        assert aggregator.retried is False

    @pytest.mark.asyncio
    async def test_no_failures_no_question(self, fake_limiter):
        """Test the retry question is not asked when everything succeeded."""
        prompt = FakePrompt(retry=True)
        aggregator = await run_pass({}, prompt, fake_limiter, [REPO], [SECRET])

        assert await aggregator.retry_failed() == []
        assert prompt.retry_questions == 0

    @pytest.mark.asyncio
    async def test_single_retry_pass(self, fake_limiter):
        """Test a second retry call does nothing even if failures remain."""
        errors = [GitHubApiError(500, "first"), GitHubApiError(500, "second")]
        service = FakeSecretService(update_errors={"K": errors})
        prompt = FakePrompt(retry=True)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])

        await aggregator.retry_failed()
        assert await aggregator.retry_failed() == []

        assert prompt.retry_questions == 1
        assert len(service.update_calls) == 2


class TestRetryDeclined:
    """Tests for how declined overwrites are treated by the retry pass."""

    @pytest.mark.asyncio
    async def test_declined_not_retried_by_default(self, fake_limiter):
        """Test a declined overwrite is not offered for retry."""
        service = FakeSecretService(existing={"K": "2024-01-01T00:00:00Z"})
        prompt = FakePrompt(overwrite=False, retry=True)
        aggregator = await run_pass({"r": service}, prompt, fake_limiter, [REPO], [SECRET])

        assert aggregator.failures()[0].error == DECLINED_REASON
        assert aggregator.retry_candidates() == []
        assert await aggregator.retry_failed() == []
        assert prompt.retry_questions == 0
        assert service.update_calls == []

    @pytest.mark.asyncio
    async def test_declined_retried_when_enabled(self, fake_limiter):
        """Test retry_declined includes declined overwrites and writes them."""
        service = FakeSecretService(existing={"K": "2024-01-01T00:00:00Z"})
        prompt = FakePrompt(overwrite=False, retry=True)
        aggregator = await run_pass(
            {"r": service},
            prompt,
            fake_limiter,
            [REPO],
            [SECRET],
            retry_declined=True,
        )

        await aggregator.retry_failed()

        assert service.update_calls == [("K", "v")]
        assert prompt.overwrite_questions == [("K", "2024-01-01T00:00:00Z")]
        assert aggregator.count_by_outcome() == (1, 0)
