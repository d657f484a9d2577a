import shutil
import tempfile
import unittest
from pathlib import Path

import pygit2

from buildcore.command_runner import RecordingCommandRunner
from buildcore.git_api import GitRepository


class BaseGitTest(unittest.TestCase):
    """Base class for git repo tests."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.path = Path(self.test_dir) / "repo"
        self.signature = pygit2.Signature("Test User", "test@example.com")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _init_with_commit(self, filename: str = "README", content: str = "x") -> tuple[pygit2.Repository, str]:
        repo = pygit2.init_repository(str(self.path))
        (self.path / filename).write_text(content)
        index = repo.index
        index.add(filename)
        index.write()
        tree = index.write_tree()
        oid = repo.create_commit("HEAD", self.signature, self.signature, "msg", tree, [])
        return repo, str(oid)


class TestGitRepositoryReads(BaseGitTest):
    def test_missing_path_is_invalid(self):
        self.assertFalse(GitRepository(self.path).is_valid)

    def test_plain_directory_is_invalid(self):
        self.path.mkdir()
        self.assertFalse(GitRepository(self.path).is_valid)

    def test_open_failure_keeps_cause(self):
        self.path.mkdir()
        with self.assertRaises(RuntimeError) as ctx:
            GitRepository(self.path).open()
        self.assertIsInstance(ctx.exception.__cause__, pygit2.GitError)

    def test_head_and_revisions(self):
        repo, head = self._init_with_commit()
        repo.create_reference("refs/tags/3.5.5", pygit2.Oid(hex=head))

        api = GitRepository(self.path)
        self.assertTrue(api.is_valid)
        self.assertEqual(api.get_head_commit(), head)
        self.assertEqual(api.resolve_rev("3.5.5"), head)
        self.assertIsNone(api.resolve_rev("no-such-tag"))
        self.assertTrue(api.head_matches("3.5.5"))
        self.assertFalse(api.head_matches("no-such-tag"))

    def test_annotated_tag_is_peeled(self):
        repo, head = self._init_with_commit()
        repo.create_tag("v1", pygit2.Oid(hex=head), pygit2.enums.ObjectType.COMMIT, self.signature, "release")
        self.assertEqual(GitRepository(self.path).resolve_rev("v1"), head)

    def test_unborn_head(self):
        pygit2.init_repository(str(self.path))
        api = GitRepository(self.path)
        self.assertIsNone(api.get_head_commit())
        self.assertFalse(api.head_matches("HEAD"))


class TestGitRepositoryWrites(BaseGitTest):
    def test_clone_and_checkout_use_cli(self):
        runner = RecordingCommandRunner()
        api, result = GitRepository.clone("https://example.com/libsass.git", self.path, runner=runner)
        api.checkout("3.5.5")

        self.assertEqual(result.returncode, 0)
        self.assertEqual(
            [record.command for record in runner.commands],
            [
                ["git", "clone", "https://example.com/libsass.git", str(self.path)],
                ["git", "checkout", "3.5.5"],
            ],
        )
        self.assertEqual(runner.commands[1].cwd, str(self.path.resolve()))


if __name__ == "__main__":
    unittest.main()
