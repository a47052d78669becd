"""End-to-end tests of the comparison loop through bruv.main with a fake git."""

import io
import json

import pytest

import bruv
from core.remote_registry import remote_name_for_url

URL_A = "https://host/a.git"
URL_B = "https://host/b.git"
HASH_A = remote_name_for_url(URL_A)
HASH_B = remote_name_for_url(URL_B)


@pytest.fixture
def scenario(fake_git):
    fake_git.counts[HASH_A] = "0\t0\n"
    fake_git.counts[HASH_B] = "1\t2\n"
    fake_git.logs[HASH_B] = "> 1a2b3c4 add feature\n> 5d6e7f8 bump version\n< 9a8b7c6 hotfix\n"
    return fake_git


def _run(fake_git, cache_dir, *extra, stdin=None):
    out = io.StringIO()
    code = bruv.main(["-c", cache_dir, *extra], stdin=stdin, stdout=out, git_backend=fake_git)
    return code, out.getvalue()


class TestTextReport:
    def test_two_repositories(self, scenario, cache_dir):
        code, output = _run(scenario, cache_dir, "main", "release", URL_A, URL_B)

        assert code == 0
        assert output.splitlines() == [
            f"{URL_A} release is same as main",
            f"{URL_B} compared to main, release is 2 commits ahead and 1 commits behind",
            "  > 1a2b3c4 add feature",
            "  > 5d6e7f8 bump version",
            "  < 9a8b7c6 hotfix",
        ]

    def test_urls_padded_to_longest(self, fake_git, cache_dir):
        long_url = "https://host/much-longer-name.git"
        code, output = _run(fake_git, cache_dir, "main", "dev", URL_A, long_url)

        assert code == 0
        lines = output.splitlines()
        assert lines[0] == URL_A.ljust(len(long_url)) + " dev is same as main"
        assert lines[1] == f"{long_url} dev is same as main"

    def test_processing_order_and_calls(self, scenario, cache_dir):
        _run(scenario, cache_dir, "main", "release", URL_A, URL_B)

        operations = [call[0] for call in scenario.calls]
        assert operations == [
            "init",
            "list_remotes", "add_remote", "update_remote", "count_divergence",
            "list_remotes", "add_remote", "update_remote", "count_divergence", "list_divergence_commits",
        ]

    def test_second_run_reuses_cache_and_remotes(self, scenario, cache_dir):
        _run(scenario, cache_dir, "main", "release", URL_A, URL_B)
        _run(scenario, cache_dir, "main", "release", URL_A, URL_B)

        assert len(scenario.called("init")) == 1
        assert len(scenario.called("add_remote")) == 2
        assert len(scenario.called("update_remote")) == 4

    def test_urls_from_stdin(self, scenario, cache_dir):
        stdin = io.StringIO(f"{URL_A}\n\n{URL_B}\n")
        code, output = _run(scenario, cache_dir, "main", "release", "-i", stdin=stdin)

        assert code == 0
        assert output.splitlines()[0].startswith(URL_A)
        assert output.splitlines()[1].startswith(URL_B)


class TestJsonReport:
    def test_document(self, scenario, cache_dir):
        code, output = _run(scenario, cache_dir, "--json", "main", "release", URL_A, URL_B)

        assert code == 0
        assert json.loads(output) == [
            {"url": URL_A, "equal": True, "status": "release is same as main", "commits": None},
            {
                "url": URL_B,
                "equal": False,
                "status": "compared to main, release is 2 commits ahead and 1 commits behind",
                "commits": ["> 1a2b3c4 add feature", "> 5d6e7f8 bump version", "< 9a8b7c6 hotfix"],
            },
        ]
        assert output.startswith("[\n  {")

    def test_failure_prints_nothing(self, scenario, cache_dir):
        scenario.failing["update_remote"] = {HASH_B}
        code, output = _run(scenario, cache_dir, "-j", "main", "release", URL_A, URL_B)

        assert code == 1
        assert output == ""


class TestFailurePolicy:
    def test_first_error_aborts_run(self, scenario, cache_dir):
        scenario.failing["update_remote"] = {HASH_A}
        code, output = _run(scenario, cache_dir, "main", "release", URL_A, URL_B)

        assert code == 1
        assert output == ""
        assert scenario.called("count_divergence") == []
        assert [call[1] for call in scenario.called("update_remote")] == [HASH_A]

    def test_partial_text_output_survives_abort(self, scenario, cache_dir):
        scenario.counts[HASH_B] = "not-a-count"
        code, output = _run(scenario, cache_dir, "main", "release", URL_A, URL_B)

        assert code == 1
        assert output.splitlines() == [f"{URL_A} release is same as main"]

    def test_keep_going_reports_every_repository(self, scenario, cache_dir):
        scenario.failing["update_remote"] = {HASH_A}
        code, output = _run(scenario, cache_dir, "--keep-going", "--json", "main", "release", URL_A, URL_B)

        assert code == 1
        records = json.loads(output)
        assert [record["url"] for record in records] == [URL_A, URL_B]
        assert "unable to update remote: " + URL_A in records[0]["error"]
        assert records[0]["commits"] is None
        assert "error" not in records[1]
        assert records[1]["commits"]

    def test_keep_going_text_mode(self, scenario, cache_dir):
        scenario.failing["add_remote"] = {HASH_B}
        code, output = _run(scenario, cache_dir, "-k", "main", "release", URL_A, URL_B)

        assert code == 1
        lines = output.splitlines()
        assert lines[0] == f"{URL_A} release is same as main"
        assert lines[1].startswith(f"{URL_B} error: unable to init remote: {URL_B}")

    def test_cache_failure_is_fatal(self, fake_git, cache_dir):
        fake_git.failing["init"] = {"*"}
        code, output = _run(fake_git, cache_dir, "-k", "main", "release", URL_A)

        assert code == 1
        assert output == ""
        assert fake_git.called("list_remotes") == []
