import re
import unittest

from vcs_status_bar.vcs.backend import VcsBackend


class TestVcsBackendValidation(unittest.TestCase):
    def test_empty_command_rejected(self) -> None:
        with self.assertRaises(ValueError):
            VcsBackend(
                name="x",
                query_command=(),
                branch_pattern=re.compile(r"(?P<branch>\w+)"),
                metadata_dir=".x",
            )

    def test_pattern_needs_branch_group(self) -> None:
        for pattern in (r"(\w+)", r"(?P<name>\w+)", r"(?P<branch>\w+)-(\d+)"):
            with self.subTest(pattern=pattern):
                with self.assertRaises(ValueError):
                    VcsBackend(
                        name="x",
                        query_command=("x",),
                        branch_pattern=re.compile(pattern),
                        metadata_dir=".x",
                    )

    def test_dirty_command_requires_pattern(self) -> None:
        with self.assertRaises(ValueError):
            VcsBackend(
                name="x",
                query_command=("x",),
                branch_pattern=re.compile(r"(?P<branch>\w+)"),
                metadata_dir=".x",
                dirty_command=("x", "status"),
            )

    def test_custom_backend_parses(self) -> None:
        backend = VcsBackend(
            name="hg",
            query_command=("hg", "branch"),
            branch_pattern=re.compile(r"^(?P<branch>[a-zA-Z0-9_-]+)$", re.MULTILINE),
            metadata_dir=".hg",
        )
        self.assertEqual(backend.parse_branch("default\n"), "default")
        self.assertFalse(backend.tracks_dirty)


if __name__ == "__main__":
    unittest.main()
