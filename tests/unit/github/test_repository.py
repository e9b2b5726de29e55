"""Unit tests for the repository handle.

Tests Repository with mocked HTTP responses to verify:
- Existence probing and name normalization
- Page accumulation for account listings and workflow runs
- Branch/tag helpers: prefix fallback, kind checks, not-found handling
- Default branch resolution
"""

from __future__ import annotations

import httpx
import pytest

from octoref.github.account import Account
from octoref.github.exceptions import (
    DefaultBranchError,
    GitHubAPIError,
    InvalidBranch,
    InvalidReference,
    InvalidTag,
    RepositoryNotFound,
)
from octoref.github.reference import parse_reference
from octoref.github.repository import Repository
from octoref.github.types import WorkflowStatus

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

BASE_URL = "https://api.github.test"
REPO_URL = f"{BASE_URL}/repos/octocat/hello-world"
COMMIT_SHA = "c" * 40


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response with the given status, JSON body, and headers."""
    return httpx.Response(status_code=status_code, json=json_data, headers=headers or {})


def _repo_json(name: str = "Hello-World", **overrides: object) -> dict:
    """Minimal GitHub repo API payload."""
    base = {
        "id": 1296269,
        "name": name,
        "full_name": f"octocat/{name}",
        "description": "My first repository",
        "html_url": f"https://github.com/octocat/{name}",
        "default_branch": "main",
        "private": False,
    }
    base.update(overrides)
    return base


def _ref_json(ref: str) -> dict:
    return {"ref": ref, "object": {"type": "commit", "sha": COMMIT_SHA}}


def _runs_page(run_numbers: list[int], total_count: int) -> dict:
    return {
        "total_count": total_count,
        "workflow_runs": [{"id": n * 1000, "run_number": n} for n in run_numbers],
    }


def _requested(http) -> list[tuple[str, str]]:
    return [(call.args[0], call.args[1]) for call in http.request.call_args_list]


# ═══════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════


class TestRepositoryIdentity:
    def test_name_is_lowercased(self, account):
        assert Repository(owner=account, name="MyRepo").name == "myrepo"

    def test_display_and_endpoint(self, repository):
        assert str(repository) == "octocat/hello-world"
        assert repository.endpoint == "repos/octocat/hello-world"

    def test_equal_regardless_of_case(self, account):
        assert Repository(owner=account, name="MyRepo") == Repository(owner=account, name="myrepo")
        assert len({Repository(owner=account, name="A"), Repository(owner=account, name="a")}) == 1

    def test_client_comes_from_owner(self, repository, github_client):
        assert repository.client is github_client


# ═══════════════════════════════════════════════════════════════════════════
# fetch / fetch_all
# ═══════════════════════════════════════════════════════════════════════════


class TestFetch:
    @pytest.mark.anyio
    async def test_probes_and_lowercases(self, http, account):
        http.request.return_value = _make_response(json_data=_repo_json("MyRepo"))

        repo = await Repository.fetch(account, "MyRepo")

        assert repo.name == "myrepo"
        assert _requested(http) == [("GET", f"{BASE_URL}/repos/octocat/MyRepo")]

    @pytest.mark.anyio
    async def test_owner_slug_and_plain_name_give_same_handle(self, http, account):
        http.request.return_value = _make_response(json_data=_repo_json("MyRepo"))

        from_slug = await Repository.fetch(account, "Owner/MyRepo")
        from_name = await Repository.fetch(account, "owner/myrepo")

        assert from_slug.name == from_name.name == "myrepo"
        assert from_slug == from_name

    @pytest.mark.anyio
    async def test_long_slug_uses_second_component(self, http, account):
        http.request.return_value = _make_response(json_data=_repo_json())

        repo = await Repository.fetch(account, "octocat/Hello-World/tree/main")

        assert repo.name == "hello-world"
        assert _requested(http) == [("GET", f"{BASE_URL}/repos/octocat/Hello-World")]

    @pytest.mark.anyio
    async def test_any_error_status_is_not_found(self, http, account):
        http.request.return_value = _make_response(status_code=403, headers={"X-RateLimit-Remaining": "10"})

        with pytest.raises(RepositoryNotFound) as exc_info:
            await Repository.fetch(account, "secret")

        assert exc_info.value.name == "secret"

    @pytest.mark.anyio
    async def test_network_failure_propagates(self, http, account):
        http.request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(GitHubAPIError) as exc_info:
            await Repository.fetch(account, "Hello-World")

        assert not isinstance(exc_info.value, RepositoryNotFound)
        assert exc_info.value.status_code is None

    @pytest.mark.anyio
    async def test_empty_name_fails_without_request(self, http, account):
        with pytest.raises(RepositoryNotFound):
            await Repository.fetch(account, "")

        http.request.assert_not_called()

    @pytest.mark.anyio
    async def test_account_get_repository_delegates(self, http, account):
        http.request.return_value = _make_response(json_data=_repo_json())

        repo = await account.get_repository("Hello-World")

        assert repo == Repository(owner=account, name="hello-world")


class TestFetchAll:
    @pytest.mark.anyio
    async def test_accumulates_until_short_page(self, http, account):
        http.request.side_effect = [
            _make_response(json_data=[_repo_json(f"repo-{i}") for i in range(100)]),
            _make_response(json_data=[_repo_json(f"repo-{i}") for i in range(100, 200)]),
            _make_response(json_data=[_repo_json(f"repo-{i}") for i in range(200, 237)]),
        ]

        repos = await Repository.fetch_all(account)

        assert len(repos) == 237
        assert repos[0].name == "repo-0"
        assert repos[-1].name == "repo-236"
        pages = [call.kwargs["params"] for call in http.request.call_args_list]
        assert pages == [
            {"per_page": 100, "page": 1},
            {"per_page": 100, "page": 2},
            {"per_page": 100, "page": 3},
        ]
        assert http.request.call_args.args == ("GET", f"{BASE_URL}/users/octocat/repos")

    @pytest.mark.anyio
    async def test_empty_first_page(self, http, account):
        http.request.return_value = _make_response(json_data=[])

        assert await account.get_repositories() == []
        assert len(http.request.call_args_list) == 1

    @pytest.mark.anyio
    async def test_names_are_lowercased(self, http, account):
        http.request.return_value = _make_response(json_data=[_repo_json("CamelCase")])

        repos = await Repository.fetch_all(account)

        assert [r.name for r in repos] == ["camelcase"]

    @pytest.mark.anyio
    async def test_error_mid_pagination_propagates(self, http, account):
        http.request.side_effect = [
            _make_response(json_data=[_repo_json(f"repo-{i}") for i in range(100)]),
            _make_response(status_code=502),
        ]

        with pytest.raises(GitHubAPIError, match="502"):
            await Repository.fetch_all(account)


# ═══════════════════════════════════════════════════════════════════════════
# Metadata
# ═══════════════════════════════════════════════════════════════════════════


class TestDetails:
    @pytest.mark.anyio
    async def test_returns_normalized_details(self, http, repository):
        http.request.return_value = _make_response(
            json_data=_repo_json(default_branch="trunk", archived=True)
        )

        details = await repository.get_details()

        assert details.default_branch == "trunk"
        assert details.is_archived is True
        assert details.full_name == "octocat/Hello-World"

    @pytest.mark.anyio
    async def test_submit_dependency_snapshot(self, http, repository):
        http.request.return_value = _make_response(status_code=201, json_data={"id": 1})
        payload = {"version": 0, "sha": COMMIT_SHA, "ref": "refs/heads/main"}

        await repository.submit_dependency_snapshot(payload)

        call = http.request.call_args
        assert call.args == ("POST", f"{REPO_URL}/dependency-graph/snapshots")
        assert call.kwargs["json"] == payload


# ═══════════════════════════════════════════════════════════════════════════
# Workflow runs
# ═══════════════════════════════════════════════════════════════════════════


class TestWorkflowRuns:
    @pytest.mark.anyio
    async def test_unknown_status_makes_no_request(self, http, repository):
        assert await repository.get_workflow_runs(WorkflowStatus.UNKNOWN) == []
        assert await repository.get_workflow_runs("not-a-status") == []

        http.request.assert_not_called()

    @pytest.mark.anyio
    async def test_returns_sorted_run_numbers(self, http, repository):
        http.request.return_value = _make_response(json_data=_runs_page([12, 3, 7], total_count=3))

        runs = await repository.get_workflow_runs(WorkflowStatus.QUEUED)

        assert runs == [3, 7, 12]
        call = http.request.call_args
        assert call.args == ("GET", f"{REPO_URL}/actions/runs")
        assert call.kwargs["params"] == {"status": "queued", "per_page": 100, "page": 1}

    @pytest.mark.anyio
    async def test_accepts_wire_string(self, http, repository):
        http.request.return_value = _make_response(json_data=_runs_page([1], total_count=1))

        await repository.get_workflow_runs("in_progress")

        assert http.request.call_args.kwargs["params"]["status"] == "in_progress"

    @pytest.mark.anyio
    async def test_pages_until_short_page(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_runs_page(list(range(1, 101)), total_count=150)),
            _make_response(json_data=_runs_page(list(range(101, 151)), total_count=150)),
        ]

        runs = await repository.get_workflow_runs(WorkflowStatus.COMPLETED)

        assert runs == list(range(1, 151))
        assert len(http.request.call_args_list) == 2

    @pytest.mark.anyio
    async def test_active_runs_are_merged_and_deduplicated(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_runs_page([9, 4], total_count=2)),  # in_progress
            _make_response(json_data=_runs_page([], total_count=0)),  # requested
            _make_response(json_data=_runs_page([11], total_count=1)),  # waiting
            _make_response(json_data=_runs_page([4, 2], total_count=2)),  # queued
        ]

        runs = await repository.get_active_workflow_runs()

        assert runs == [2, 4, 9, 11]
        statuses = [call.kwargs["params"]["status"] for call in http.request.call_args_list]
        assert statuses == ["in_progress", "requested", "waiting", "queued"]


# ═══════════════════════════════════════════════════════════════════════════
# References
# ═══════════════════════════════════════════════════════════════════════════


class TestReferences:
    @pytest.mark.anyio
    async def test_get_some_reference_none_on_404(self, http, repository):
        http.request.return_value = _make_response(status_code=404)

        assert await repository.get_some_reference("heads/gone") is None
        assert await repository.has_reference("heads/gone") is False

    @pytest.mark.anyio
    async def test_get_some_reference_propagates_other_errors(self, http, repository):
        http.request.return_value = _make_response(status_code=401)

        with pytest.raises(GitHubAPIError, match="Invalid or expired"):
            await repository.get_some_reference("heads/main")

    @pytest.mark.anyio
    async def test_get_some_reference_propagates_invalid(self, http, repository):
        with pytest.raises(InvalidReference):
            await repository.get_some_reference("main")

    @pytest.mark.anyio
    async def test_create_and_delete_reference(self, http, repository):
        http.request.side_effect = [
            _make_response(status_code=201, json_data=_ref_json("refs/pull/3/head")),
            _make_response(status_code=204),
        ]

        ref = await repository.create_reference("pull/3/head", COMMIT_SHA)
        await repository.delete_reference(ref)

        assert _requested(http) == [
            ("POST", f"{REPO_URL}/git/refs"),
            ("DELETE", f"{REPO_URL}/git/refs/pull/3/head"),
        ]


class TestBranches:
    @pytest.mark.anyio
    async def test_bare_name_gets_heads_prefix(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/heads/main"))

        branch = await repository.get_branch("main")

        assert branch.is_branch
        assert branch.name == "main"
        assert _requested(http) == [("GET", f"{REPO_URL}/git/ref/heads/main")]

    @pytest.mark.anyio
    async def test_full_reference_is_used_as_is(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/heads/feature/x"))

        branch = await repository.get_branch("refs/heads/feature/x")

        assert branch.name == "feature/x"
        assert _requested(http) == [("GET", f"{REPO_URL}/git/ref/heads/feature/x")]

    @pytest.mark.anyio
    async def test_tag_reference_is_not_a_branch(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/tags/v1"))

        with pytest.raises(InvalidBranch) as exc_info:
            await repository.get_branch("tags/v1")

        assert exc_info.value.name == "tags/v1"

    @pytest.mark.anyio
    async def test_missing_branch_is_invalid_branch(self, http, repository):
        http.request.return_value = _make_response(status_code=404)

        with pytest.raises(InvalidBranch):
            await repository.get_branch("gone")

    @pytest.mark.anyio
    async def test_empty_name_is_invalid_branch(self, http, repository):
        with pytest.raises(InvalidBranch) as exc_info:
            await repository.get_branch("")

        assert isinstance(exc_info.value.__cause__, InvalidReference)
        http.request.assert_not_called()

    @pytest.mark.anyio
    async def test_get_branch_propagates_transport_errors(self, http, repository):
        http.request.return_value = _make_response(status_code=500)

        with pytest.raises(GitHubAPIError):
            await repository.get_branch("main")

    @pytest.mark.anyio
    async def test_get_some_branch(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_ref_json("refs/heads/main")),
            _make_response(status_code=404),
        ]

        assert (await repository.get_some_branch("main")).name == "main"
        assert await repository.get_some_branch("gone") is None

    @pytest.mark.anyio
    async def test_get_some_branch_rejects_other_kinds(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/pull/1/head"))

        with pytest.raises(InvalidBranch):
            await repository.get_some_branch("pull/1/head")

    @pytest.mark.anyio
    async def test_has_branch(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/heads/mainline"))

        assert await repository.has_branch("main") is False

    @pytest.mark.anyio
    async def test_create_branch(self, http, repository):
        http.request.return_value = _make_response(status_code=201, json_data=_ref_json("refs/heads/topic"))

        branch = await repository.create_branch("topic", COMMIT_SHA)

        assert branch == parse_reference(repository, "heads/topic")
        assert http.request.call_args.kwargs["json"]["ref"] == "refs/heads/topic"

    @pytest.mark.anyio
    async def test_delete_branch_refuses_tags(self, http, repository):
        with pytest.raises(InvalidBranch):
            await repository.delete_branch(parse_reference(repository, "tags/v1"))

        http.request.assert_not_called()

    @pytest.mark.anyio
    async def test_delete_branch(self, http, repository):
        http.request.return_value = _make_response(status_code=204)

        await repository.delete_branch(parse_reference(repository, "heads/topic"))

        assert _requested(http) == [("DELETE", f"{REPO_URL}/git/refs/heads/topic")]


class TestTags:
    @pytest.mark.anyio
    async def test_bare_name_gets_tags_prefix(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/tags/v1.0"))

        tag = await repository.get_tag("v1.0")

        assert tag.is_tag
        assert _requested(http) == [("GET", f"{REPO_URL}/git/ref/tags/v1.0")]

    @pytest.mark.anyio
    async def test_branch_reference_is_not_a_tag(self, http, repository):
        http.request.return_value = _make_response(json_data=_ref_json("refs/heads/main"))

        with pytest.raises(InvalidTag):
            await repository.get_tag("heads/main")

    @pytest.mark.anyio
    async def test_empty_name_is_invalid_tag(self, http, repository):
        with pytest.raises(InvalidTag):
            await repository.get_tag("")

        http.request.assert_not_called()

    @pytest.mark.anyio
    async def test_has_tag(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_ref_json("refs/tags/v1")),
            _make_response(status_code=404),
        ]

        assert await repository.has_tag("v1") is True
        assert await repository.has_tag("v2") is False

    @pytest.mark.anyio
    async def test_create_tag(self, http, repository):
        http.request.return_value = _make_response(status_code=201, json_data=_ref_json("refs/tags/v3"))

        tag = await repository.create_tag("v3", COMMIT_SHA)

        assert tag.is_tag
        assert http.request.call_args.kwargs["json"] == {"ref": "refs/tags/v3", "sha": COMMIT_SHA}

    @pytest.mark.anyio
    async def test_delete_tag_refuses_branches(self, http, repository):
        with pytest.raises(InvalidTag):
            await repository.delete_tag(parse_reference(repository, "heads/main"))

        http.request.assert_not_called()


class TestDefaultBranch:
    @pytest.mark.anyio
    async def test_resolves_declared_default_branch(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_repo_json(default_branch="trunk")),
            _make_response(json_data=_ref_json("refs/heads/trunk")),
        ]

        branch = await repository.get_default_branch()

        assert branch.name == "trunk"
        assert _requested(http)[-1] == ("GET", f"{REPO_URL}/git/ref/heads/trunk")

    @pytest.mark.anyio
    async def test_unresolvable_default_branch(self, http, repository):
        http.request.side_effect = [
            _make_response(json_data=_repo_json(default_branch="ghost")),
            _make_response(status_code=404),
        ]

        with pytest.raises(DefaultBranchError) as exc_info:
            await repository.get_default_branch()

        assert exc_info.value.name == "ghost"

    @pytest.mark.anyio
    async def test_details_failure_propagates(self, http, repository):
        http.request.return_value = _make_response(status_code=401)

        with pytest.raises(GitHubAPIError, match="Invalid or expired"):
            await repository.get_default_branch()


def test_account_identity_ignores_client():
    assert Account("octocat") == Account("octocat")
    assert str(Account("octocat")) == "octocat"
