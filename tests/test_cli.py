import unittest
from pathlib import Path
from typing import Optional, get_type_hints
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

import commit_crafter.cli as cli
from commit_crafter import __version__
from commit_crafter.config.loader import (
    Config,
    ConfigDirectoryError,
    ConfigMalformedError,
    ConfigNotFoundError,
    MissingKeyError,
)
from commit_crafter.llm.openai_client import LLMNetworkError
from commit_crafter.vcs.svn_client import SVNError


CONFIG = Config(openai_api_key="sk-test", openai_model="gpt-test")


class DummyGenerator:
    def __init__(self, message="Fix bug", error=None):
        self.message = message
        self.error = error
        self.calls = []

    def generate(self, diff, extra=None):
        self.calls.append((diff, extra))
        if self.error is not None:
            raise self.error
        return self.message


def make_svn(diff="Index: a.txt\n+line\n", installed=True, diff_error=None):
    svn_cls = MagicMock()
    svn_cls.is_installed.return_value = installed
    instance = svn_cls.return_value
    if diff_error is not None:
        instance.diff.side_effect = diff_error
    else:
        instance.diff.return_value = diff
    return svn_cls


def make_git(installed=False, repository=False):
    git_cls = MagicMock()
    git_cls.is_installed.return_value = installed
    git_cls.return_value.is_repository.return_value = repository
    git_cls.return_value.add_command.return_value = "git add ."
    git_cls.return_value.commit_command.return_value = "git commit -m 'Fix bug'"
    git_cls.return_value.commit.return_value = True
    return git_cls


class TestCLI(unittest.TestCase):
    def invoke(self, args, input=None, svn=None, git=None, generator=None, config=CONFIG):
        runner = CliRunner()
        self.svn_cls = svn or make_svn()
        self.git_cls = git or make_git()
        self.generator = generator or DummyGenerator()
        config_patch = (
            patch.object(cli, "load_config", side_effect=config)
            if isinstance(config, Exception)
            else patch.object(cli, "load_config", return_value=config)
        )
        with patch.object(cli, "SVNClient", self.svn_cls), \
                patch.object(cli, "GitClient", self.git_cls), \
                patch.object(cli, "OpenAIClient", return_value=self.generator) as self.openai_cls, \
                config_patch:
            return runner.invoke(cli.main, args, input=input)

    def test_version(self) -> None:
        result = CliRunner().invoke(cli.main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_commit_accept(self) -> None:
        result = self.invoke(["commit", "a.txt"], input="y\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.svn_cls.return_value.diff.assert_called_once_with(("a.txt",))
        self.svn_cls.return_value.commit.assert_called_once_with("Fix bug", ["a.txt"])
        self.openai_cls.assert_called_once_with(CONFIG)
        self.assertIn("Fix bug", result.output)
        self.assertIn("gpt-test", result.output)

    def test_commit_regenerate_then_accept(self) -> None:
        result = self.invoke(["commit"], input="r\nmention refactor\n\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(self.generator.calls), 2)
        self.assertEqual(self.generator.calls[1][1], "mention refactor")
        self.svn_cls.return_value.commit.assert_called_once_with("Fix bug", [])

    def test_commit_show_command(self) -> None:
        result = self.invoke(["commit", "a.txt"], input="s\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("svn commit -m 'Fix bug' a.txt", result.output)
        self.svn_cls.return_value.commit.assert_not_called()

    def test_commit_exit(self) -> None:
        result = self.invoke(["commit"], input="n\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.svn_cls.return_value.commit.assert_not_called()

    def test_commit_failure_prints_manual_command(self) -> None:
        svn = make_svn()
        svn.return_value.commit.side_effect = SVNError("File is out of date")
        result = self.invoke(["commit", "a.txt"], input="y\n", svn=svn)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("out of date", result.output)
        self.assertIn("svn commit -m 'Fix bug' a.txt", result.output)

    def test_commit_mirrors_to_git(self) -> None:
        git = make_git(installed=True, repository=True)
        result = self.invoke(["commit"], input="y\ny\n", git=git)
        self.assertEqual(result.exit_code, 0, result.output)
        git.return_value.add.assert_called_once_with([])
        git.return_value.commit.assert_called_once_with("Fix bug")

    def test_git_not_installed_skips_mirror(self) -> None:
        git = make_git(installed=False)
        result = self.invoke(["commit"], input="y\n", git=git)
        self.assertEqual(result.exit_code, 0, result.output)
        git.assert_not_called()

    def test_no_changes(self) -> None:
        result = self.invoke(["commit"], svn=make_svn(diff=""))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No changes detected", result.output)
        self.assertEqual(self.generator.calls, [])

    def test_svn_missing(self) -> None:
        result = self.invoke(["commit"], svn=make_svn(installed=False))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("sudo apt install subversion", result.output)
        self.svn_cls.return_value.diff.assert_not_called()

    def test_diff_failure(self) -> None:
        result = self.invoke(["commit"], svn=make_svn(diff_error=SVNError("not a working copy")))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("not a working copy", result.output)
        self.assertEqual(self.generator.calls, [])

    def test_generation_failure(self) -> None:
        generator = DummyGenerator(error=LLMNetworkError("connection refused"))
        result = self.invoke(["commit"], generator=generator)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("connection refused", result.output)
        self.svn_cls.return_value.commit.assert_not_called()

    def test_config_not_found_prints_example(self) -> None:
        result = self.invoke(["commit"], config=ConfigNotFoundError(Path("/home/u/.config/commit_crafter/config.toml")))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('openai_api_key = "your-api-key"', result.output)
        self.svn_cls.return_value.diff.assert_not_called()

    def test_config_errors_are_reported(self) -> None:
        for error in (
            ConfigDirectoryError("Unable to determine the configuration directory"),
            ConfigMalformedError("Invalid TOML"),
            MissingKeyError("'openai_api_key' is not set"),
        ):
            result = self.invoke(["commit"], config=error)
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn(str(error), result.output)
            self.svn_cls.return_value.diff.assert_not_called()

    def test_load_config_or_report_returns_config(self) -> None:
        self.assertEqual(get_type_hints(cli.load_config_or_report)["return"], Optional[Config])
        with patch.object(cli, "load_config", return_value=CONFIG):
            self.assertIs(cli.load_config_or_report(), CONFIG)
        with patch.object(cli, "load_config", side_effect=MissingKeyError("unset")):
            self.assertIsNone(cli.load_config_or_report())

    def test_unexpected_error_exits_nonzero(self) -> None:
        result = self.invoke(["commit"], svn=make_svn(diff_error=RuntimeError("boom")))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unexpected error: boom", result.output)


if __name__ == "__main__":
    unittest.main()
