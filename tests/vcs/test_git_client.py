import subprocess
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from commit_analyzer.vcs.git_client import GitClient, GitError


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class TestGitClient(unittest.TestCase):
    def test_get_staged_files(self) -> None:
        def fake_run(self, args, check=True):
            if args == ["diff", "--cached", "--name-only"]:
                return DummyProc(returncode=0, stdout="src/app.py\n\ndocs/guide.md\n", stderr="")
            raise AssertionError(f"Unexpected git command: {args}")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            self.assertEqual(client.get_staged_files(), ["src/app.py", "docs/guide.md"])

    def test_get_staged_diff(self) -> None:
        diff = "diff --git a/a.py b/a.py\n+x\n"
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(returncode=0, stdout=diff, stderr="")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            self.assertEqual(client.get_staged_diff(), diff)
        self.assertEqual(calls, [["diff", "--cached"]])

    def test_run_raises_on_failure(self) -> None:
        failed = DummyProc(returncode=128, stdout="", stderr="fatal: not a git repository\n")
        with patch("subprocess.run", return_value=failed):
            client = GitClient(Path("/repo"))
            with self.assertRaises(GitError) as ctx:
                client.get_staged_diff()
        self.assertIn("not a git repository", str(ctx.exception))

    def test_run_without_check_returns_result(self) -> None:
        failed = DummyProc(returncode=1, stdout="out", stderr="")
        with patch("subprocess.run", return_value=failed):
            result = GitClient(Path("/repo"))._run(["status"], check=False)
        self.assertEqual(result.returncode, 1)

    def test_missing_git_executable(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            client = GitClient(Path("/repo"))
            with self.assertRaises(GitError):
                client.get_staged_files()

    def test_run_uses_repo_root(self) -> None:
        ok = DummyProc(returncode=0, stdout="", stderr="")
        with patch("subprocess.run", return_value=ok) as mock_run:
            GitClient(Path("/repo")).get_staged_files()
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["git", "diff", "--cached", "--name-only"])
        self.assertEqual(kwargs["cwd"], Path("/repo"))
        self.assertEqual(kwargs["stdout"], subprocess.PIPE)


class TestRepoDiscovery(unittest.TestCase):
    def test_find_repo_root_from_subdirectory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "src" / "pkg"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root)
            self.assertTrue(GitClient.is_repo(root))
            self.assertFalse(GitClient.is_repo(nested))

    def test_find_repo_root_uses_is_repo(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            nested = Path(tmp).resolve() / "a" / "b"
            nested.mkdir(parents=True)
            with patch.object(GitClient, "is_repo", side_effect=lambda p: p == nested.parent) as is_repo:
                self.assertEqual(GitClient.find_repo_root(nested), nested.parent)
            self.assertEqual([c.args[0] for c in is_repo.call_args_list], [nested, nested.parent])

    def test_find_repo_root_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with patch("pathlib.Path.exists", return_value=False):
                self.assertIsNone(GitClient.find_repo_root(Path(tmp)))


if __name__ == "__main__":
    unittest.main()
