import tempfile
import unittest
from pathlib import Path

from vcs_status_bar.vcs.git_backend import GIT_BACKEND


class TestGitBranchParsing(unittest.TestCase):
    def test_marked_branch_is_extracted(self) -> None:
        output = "  master\n* feature-x\n  old\n"
        self.assertEqual(GIT_BACKEND.parse_branch(output), "feature-x")

    def test_first_line(self) -> None:
        self.assertEqual(GIT_BACKEND.parse_branch("* main\n  dev\n"), "main")

    def test_underscores_and_digits(self) -> None:
        self.assertEqual(GIT_BACKEND.parse_branch("* release_2-0\n"), "release_2-0")

    def test_slash_ends_branch_name(self) -> None:
        # Only [A-Za-z0-9_-] are captured
        self.assertEqual(GIT_BACKEND.parse_branch("* feature/login\n"), "feature")

    def test_detached_head_does_not_match(self) -> None:
        output = "* (HEAD detached at 1a2b3c4)\n  main\n"
        self.assertIsNone(GIT_BACKEND.parse_branch(output))

    def test_not_a_repository(self) -> None:
        self.assertIsNone(GIT_BACKEND.parse_branch(""))
        self.assertIsNone(GIT_BACKEND.parse_branch("fatal: not a git repository\n"))

    def test_star_not_at_line_start(self) -> None:
        self.assertIsNone(GIT_BACKEND.parse_branch("  note * main\n"))


class TestGitDirtyState(unittest.TestCase):
    def test_empty_porcelain_output_is_clean(self) -> None:
        self.assertTrue(GIT_BACKEND.tracks_dirty)
        self.assertIs(GIT_BACKEND.is_clean(""), True)
        self.assertIs(GIT_BACKEND.is_clean("\n"), True)

    def test_porcelain_entries_are_dirty(self) -> None:
        for output in (" M setup.cfg\n", "A  new.py\n", "D  gone.py\nR  old.py -> new.py\n"):
            with self.subTest(output=output):
                self.assertIs(GIT_BACKEND.is_clean(output), False)

    def test_localized_status_text_is_not_consulted(self) -> None:
        # Long-format output is never requested; any text at all counts as changes
        self.assertIs(GIT_BACKEND.is_clean("nichts zu committen, Arbeitsverzeichnis unver\u00e4ndert\n"), False)

    def test_dirty_command(self) -> None:
        self.assertEqual(
            GIT_BACKEND.dirty_command, ("git", "status", "--porcelain", "--untracked-files=no")
        )


class TestGitWorkingCopy(unittest.TestCase):
    def test_find_working_copy_walks_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "src" / "pkg"
            nested.mkdir(parents=True)
            self.assertEqual(GIT_BACKEND.find_working_copy(nested), root)

    def test_svn_marker_is_not_a_git_working_copy(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / ".svn").mkdir()
            found = GIT_BACKEND.find_working_copy(Path(tmp))
            # The temp dir may itself live inside some unrelated checkout
            self.assertNotEqual(found, Path(tmp).resolve())


if __name__ == "__main__":
    unittest.main()
