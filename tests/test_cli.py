"""Tests for the command-line interface"""
from unittest.mock import Mock, patch

import pytest
from rich.prompt import Confirm, Prompt

from git_prune_branches.cli.args import parse_args
from git_prune_branches.cli.main import build_config, main, run
from git_prune_branches.cli.prompts import (
    ConfirmResult,
    Selection,
    confirm_deletion,
    default_selection,
    format_indices,
    parse_selection,
)
from git_prune_branches.config import Config
from git_prune_branches.models.branch import (
    BranchClassification,
    BranchGroup,
    DeletionFailure,
    DeletionResult,
)
from git_prune_branches.services.display_service import DisplayService, selectable_rows


def local_branches(repo):
    return {head.name for head in repo.heads}


@pytest.fixture
def in_repo(git_repo_with_branches, monkeypatch):
    """Run the CLI from inside the scenario repository."""
    monkeypatch.chdir(git_repo_with_branches.working_dir)
    return git_repo_with_branches


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        args = parse_args([])
        assert args.remote == "origin"
        assert args.protected is None
        assert args.dry_run is False
        assert args.prune_all is False
        assert args.git_timeout is None

    def test_short_flags(self):
        """Test the short option forms."""
        args = parse_args(["-d", "-p", "-f", "-y", "-r", "upstream"])
        assert args.dry_run and args.prune_all and args.force and args.yes
        assert args.remote == "upstream"

    def test_build_config(self):
        """Test the configuration built from arguments."""
        config = build_config(parse_args(["--protected", "main,release", "--git-timeout", "5"]))
        assert config.protected_branches == ["main", "release"]
        assert config.git_timeout == 5.0

    def test_invalid_timeout(self):
        """Test a non-positive timeout is rejected by argparse."""
        with pytest.raises(SystemExit):
            parse_args(["--git-timeout", "0"])


class TestParseSelection:
    """Test parsing of the selection answer."""

    def test_numbers_and_ranges(self):
        """Test numbers, ranges and separators."""
        assert parse_selection("1,3 5-6", 6) == [0, 2, 4, 5]

    def test_reversed_range(self):
        """Test a reversed range is accepted."""
        assert parse_selection("3-1", 3) == [0, 1, 2]

    def test_all_and_none(self):
        """Test the keywords."""
        assert parse_selection("all", 3) == [0, 1, 2]
        assert parse_selection("none", 3) == []
        assert parse_selection("  ", 3) == []

    def test_duplicates_collapse(self):
        """Test repeated numbers select once."""
        assert parse_selection("2,2,1-2", 2) == [0, 1]

    def test_out_of_range(self):
        """Test numbers outside the table are rejected."""
        with pytest.raises(ValueError):
            parse_selection("4", 3)
        with pytest.raises(ValueError):
            parse_selection("0", 3)

    def test_garbage(self):
        """Test non-numeric tokens are rejected."""
        with pytest.raises(ValueError):
            parse_selection("feature/x", 3)

    def test_format_indices(self):
        """Test indices render as the answer that selects them."""
        assert format_indices([0, 2]) == "1,3"
        assert parse_selection(format_indices([0, 2]), 3) == [0, 2]


class TestDefaultSelection:
    """Test the initial selection."""

    def test_safe_preselected(self):
        """Test safe branches start selected and force branches do not."""
        classification = BranchClassification(safe_to_delete=["a"], requires_force=["b"])
        assert default_selection(classification) == Selection(safe=["a"], force=[])

    def test_previous_restored(self):
        """Test going back restores the previous choice."""
        classification = BranchClassification(safe_to_delete=["a", "c"], requires_force=["b"])
        previous = Selection(safe=["c"], force=["b"])
        assert default_selection(classification, previous) == Selection(safe=["c"], force=["b"])


class TestConfirmDeletion:
    """Test the confirmation prompt."""

    def test_empty_queue_cancels(self):
        """Test nothing selected cancels without prompting."""
        with patch.object(Prompt, "ask") as mock_ask:
            assert confirm_deletion([], [], DisplayService()) == ConfirmResult.CANCEL
        mock_ask.assert_not_called()

    @pytest.mark.parametrize(
        "answer,expected",
        [("y", ConfirmResult.CONFIRM), ("n", ConfirmResult.CANCEL), ("b", ConfirmResult.BACK)],
    )
    def test_answers(self, answer, expected):
        """Test each answer maps to its result."""
        with patch.object(Prompt, "ask", return_value=answer):
            assert confirm_deletion(["a"], [], DisplayService()) == expected


class TestMain:
    """Test the main entry point against a real repository."""

    def test_prune_all_deletes_safe_only(self, in_repo):
        """Test -p deletes safe branches without prompting."""
        with patch.object(Prompt, "ask") as mock_ask:
            assert main(["-p"]) == 0
        mock_ask.assert_not_called()
        assert local_branches(in_repo) == {"main", "wip/y", "renamed-local"}

    def test_prune_all_with_force(self, in_repo):
        """Test -p -f also deletes unmerged branches."""
        assert main(["-p", "-f"]) == 0
        assert local_branches(in_repo) == {"main", "renamed-local"}

    def test_dry_run_deletes_nothing(self, in_repo, capsys):
        """Test -d prints the commands and leaves branches alone."""
        with patch.object(Prompt, "ask", return_value="all"):
            assert main(["-d"]) == 0
        assert local_branches(in_repo) == {"main", "feature/x", "wip/y", "renamed-local"}
        output = capsys.readouterr().out
        assert "git branch -d feature/x" in output
        assert "git branch -D wip/y" in output

    def test_interactive_select_and_confirm(self, in_repo):
        """Test selecting everything and confirming deletes both groups."""
        with patch.object(Prompt, "ask", side_effect=["all", "y"]):
            assert main([]) == 0
        assert local_branches(in_repo) == {"main", "renamed-local"}

    def test_back_returns_to_selection(self, in_repo):
        """Test 'b' goes back and the new selection is used."""
        with patch.object(Prompt, "ask", side_effect=["2", "b", "1", "y"]):
            assert main([]) == 0
        assert local_branches(in_repo) == {"main", "wip/y", "renamed-local"}

    def test_cancel(self, in_repo):
        """Test answering no removes nothing."""
        with patch.object(Prompt, "ask", side_effect=["all", "n"]):
            assert main([]) == 0
        assert local_branches(in_repo) == {"main", "feature/x", "wip/y", "renamed-local"}

    def test_ctrl_c_exits_cleanly(self, in_repo, capsys):
        """Test an interrupt at the prompt exits with status 0."""
        with patch.object(Prompt, "ask", side_effect=KeyboardInterrupt):
            assert main([]) == 0
        assert "feature/x" in local_branches(in_repo)
        output = capsys.readouterr().out
        assert "until next time" in output
        assert "Interrupted during a branch deletion" not in output

    def test_protected_option(self, in_repo):
        """Test --protected keeps a branch out of the deletion groups."""
        assert main(["-p", "-f", "--protected", "main,wip/y"]) == 0
        assert "wip/y" in local_branches(in_repo)

    def test_empty_remote(self, in_repo, capsys):
        """Test an empty remote exits with status 1."""
        assert main(["-r", ""]) == 1
        assert "Remote is empty" in capsys.readouterr().out

    def test_not_a_repository(self, temp_dir, monkeypatch, capsys):
        """Test running outside a repository exits with status 1."""
        monkeypatch.chdir(temp_dir)
        assert main([]) == 1
        assert "Not a git repository" in capsys.readouterr().out

    def test_nothing_to_do(self, git_repo, monkeypatch, capsys):
        """Test a clean repository reports that nothing was found."""
        monkeypatch.chdir(git_repo.working_dir)
        with patch.object(Prompt, "ask") as mock_ask:
            assert main([]) == 0
        mock_ask.assert_not_called()
        assert "No stale branches were found" in capsys.readouterr().out


class TestRetryFlow:
    """Test the forced retry after failed deletions."""

    def make_pruner(self, config):
        pruner = Mock()
        pruner.config = config
        pruner.classify.return_value = BranchClassification(safe_to_delete=["a", "b"])
        pruner.delete_branches.return_value = DeletionResult(
            deleted=["a"], failed=[DeletionFailure("b", "error: not fully merged")]
        )
        pruner.retry_failed.return_value = DeletionResult(deleted=["a", "b"])
        return pruner

    def test_retry_selected_failures(self):
        """Test failed branches are retried with force after confirmation."""
        pruner = self.make_pruner(Config())
        with patch.object(Prompt, "ask", side_effect=["all", "y", "all"]), patch.object(
            Confirm, "ask", return_value=True
        ):
            assert run(pruner, DisplayService()) == 0

        first_pass = pruner.delete_branches.return_value
        pruner.retry_failed.assert_called_once_with(first_pass, ["b"])

    def test_retry_declined(self):
        """Test declining the retry leaves the failure and exits with status 1."""
        pruner = self.make_pruner(Config())
        with patch.object(Prompt, "ask", side_effect=["all", "y", "all"]), patch.object(
            Confirm, "ask", return_value=False
        ):
            assert run(pruner, DisplayService()) == 1
        pruner.retry_failed.assert_not_called()

    def test_retry_nothing_selected(self):
        """Test selecting no branch to retry skips the retry."""
        pruner = self.make_pruner(Config())
        with patch.object(Prompt, "ask", side_effect=["all", "y", "none"]):
            assert run(pruner, DisplayService()) == 1
        pruner.retry_failed.assert_not_called()

    def test_prune_all_retries_without_confirmation(self):
        """Test --prune-all still offers the retry and confirms it automatically."""
        pruner = self.make_pruner(Config(prune_all=True))
        with patch.object(Prompt, "ask", return_value="all") as mock_ask, patch.object(
            Confirm, "ask"
        ) as mock_confirm:
            assert run(pruner, DisplayService()) == 0

        # Only the retry selection prompts
        assert mock_ask.call_count == 1
        mock_confirm.assert_not_called()
        pruner.retry_failed.assert_called_once_with(pruner.delete_branches.return_value, ["b"])

    def test_no_retry_when_already_forced(self):
        """Test --force skips the retry, since every deletion already used -D."""
        pruner = self.make_pruner(Config(prune_all=True, force=True))
        with patch.object(Prompt, "ask") as mock_ask:
            assert run(pruner, DisplayService()) == 1
        mock_ask.assert_not_called()
        pruner.retry_failed.assert_not_called()


class TestInterruptedDeletion:
    """Test Ctrl+C while a branch deletion is running."""

    def test_warns_when_interrupted_mid_deletion(self, capsys):
        """Test the operator is told a deletion was interrupted."""
        pruner = Mock()
        pruner.git_service.in_git_operation = False
        pruner.classify.return_value = BranchClassification(safe_to_delete=["a"])

        def interrupted_delete(safe, force):
            pruner.git_service.in_git_operation = True
            raise KeyboardInterrupt

        def make_pruner(repo_path, config):
            pruner.config = config
            return pruner

        pruner.delete_branches.side_effect = interrupted_delete
        with patch("git_prune_branches.cli.main.BranchPruner", side_effect=make_pruner):
            assert main(["-p"]) == 0

        output = capsys.readouterr().out
        assert "Interrupted during a branch deletion" in output
        assert "until next time" in output


class TestDisplayService:
    """Test display output that depends on the classification or verbosity."""

    def test_selectable_rows(self):
        """Test rows are safe then force branches, tagged with their group."""
        classification = BranchClassification(
            safe_to_delete=["a"], requires_force=["b"], info_only=["c"]
        )
        assert selectable_rows(classification) == [
            ("a", BranchGroup.SAFE),
            ("b", BranchGroup.FORCE),
        ]

    def test_verbose_lists_deleted_branches(self, capsys):
        """Test verbose output names every deleted branch and how it was deleted."""
        result = DeletionResult(deleted=["a", "b"])
        DisplayService(verbose=True).display_deletion_result(result, ["a"], ["b"])
        output = capsys.readouterr().out
        assert "Removed branch a" in output
        assert "Removed branch b (forced)" in output

    def test_quiet_output_has_only_totals(self, capsys):
        """Test non-verbose output only reports the totals."""
        result = DeletionResult(deleted=["a", "b"])
        DisplayService().display_deletion_result(result, ["a"], ["b"])
        output = capsys.readouterr().out
        assert "Removed branch" not in output
        assert "Successfully deleted 2 branches" in output
