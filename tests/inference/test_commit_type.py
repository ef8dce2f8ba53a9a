"""Tests for commit type inference."""

import unittest

from commit_analyzer.diff.models import FileCategory, FileRecord
from commit_analyzer.inference.commit_type import CommitType, infer_commit_type, score_commit_types


def source(path, new=False, deleted=False):
    return FileRecord(path, FileCategory.SOURCE, is_new=new, is_deleted=deleted)


def make_test(path, new=False):
    return FileRecord(path, FileCategory.TEST, is_new=new)


def doc(path):
    return FileRecord(path, FileCategory.DOC)


def config(path, new=False):
    return FileRecord(path, FileCategory.CONFIG, is_new=new)


class TestInferCommitType(unittest.TestCase):
    def test_empty_is_chore(self):
        self.assertEqual(infer_commit_type([]), "chore")

    def test_readme_only_is_docs(self):
        self.assertEqual(infer_commit_type([doc("README.md")]), "docs")

    def test_new_source_is_feat(self):
        self.assertEqual(infer_commit_type([source("api/handler.go", new=True)]), "feat")

    def test_new_modules_are_feat(self):
        files = [
            source("internal/payments/service.go", new=True),
            source("internal/payments/handler.go", new=True),
            source("internal/ledger/ledger.go", new=True),
        ]
        self.assertEqual(infer_commit_type(files), "feat")

    def test_modified_source_is_refactor(self):
        self.assertEqual(infer_commit_type([source("api/handler.go")]), "refactor")

    def test_deleted_source_alone_falls_back_to_chore(self):
        self.assertEqual(infer_commit_type([source("api/legacy.go", deleted=True)]), "chore")

    def test_dependency_manifests_only_is_build(self):
        self.assertEqual(infer_commit_type([config("go.mod"), config("go.sum")]), "build")

    def test_regular_config_only_is_chore(self):
        files = [config(".github/workflows/ci.yml"), config("deploy/values.yaml")]
        self.assertEqual(infer_commit_type(files), "chore")

    def test_new_test_is_test(self):
        self.assertEqual(infer_commit_type([make_test("api/handler_test.go", new=True)]), "test")

    def test_modified_test_is_test(self):
        self.assertEqual(infer_commit_type([make_test("api/handler_test.go")]), "test")

    def test_new_source_beats_manifest_changes(self):
        files = [
            source("cmd/serve.go", new=True),
            config("go.mod"),
            config("go.sum"),
            config("package.json"),
            config("package-lock.json"),
        ]
        self.assertEqual(infer_commit_type(files), "feat")

    def test_modified_source_beats_tests_and_docs(self):
        files = [source("api/handler.go"), make_test("api/handler_test.go"), doc("README.md")]
        self.assertEqual(infer_commit_type(files), "refactor")

    def test_tie_goes_to_earlier_type(self):
        # docs +3 and modified test +3 score the same
        files = [doc("README.md"), make_test("api/handler_test.go")]
        self.assertEqual(infer_commit_type(files), "docs")

    def test_mixed_dependency_and_config_without_source(self):
        # build +2 and chore +2 tie, no only-one-kind bonus applies
        files = [config("go.mod"), config("config.yaml")]
        self.assertEqual(infer_commit_type(files), "build")

    def test_result_is_always_a_known_label(self):
        labels = {t.value for t in CommitType}
        samples = [
            [source("a.py")],
            [doc("a.md"), config("b.yaml")],
            [source("x/y.py", deleted=True), make_test("x/y_test.py", new=True)],
        ]
        for files in samples:
            with self.subTest(files=[f.path for f in files]):
                self.assertIn(infer_commit_type(files), labels)


class TestScoreCommitTypes(unittest.TestCase):
    def test_new_source_weights(self):
        scores = score_commit_types([source("a/x.go", new=True), source("b/y.go", new=True)])
        # 2 * 15 per file + 30 new dirs + 30 new sources + 50 override
        self.assertEqual(scores[CommitType.FEAT], 140)
        self.assertEqual(scores[CommitType.BUILD], -20)
        self.assertEqual(scores[CommitType.CHORE], -20)

    def test_modified_source_weights(self):
        scores = score_commit_types([source("a/x.go")])
        self.assertEqual(scores[CommitType.REFACTOR], 10)
        self.assertEqual(scores[CommitType.FIX], 5)

    def test_new_root_files_do_not_count_as_new_directories(self):
        scores = score_commit_types([doc("NOTES.md"), config("extra.yaml", new=True)])
        self.assertEqual(scores[CommitType.FEAT], 0)

    def test_dependency_only_bonus(self):
        scores = score_commit_types([config("go.mod")])
        self.assertEqual(scores[CommitType.BUILD], 17)
        self.assertEqual(scores[CommitType.CHORE], -5)

    def test_regular_config_only_bonus(self):
        scores = score_commit_types([config("config.yaml")])
        self.assertEqual(scores[CommitType.CHORE], 17)
        self.assertEqual(scores[CommitType.BUILD], -5)


if __name__ == "__main__":
    unittest.main()
