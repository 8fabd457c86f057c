import dataclasses
import unittest

from prmate.grouping.commit_types import _LABELS, NON_CONVENTIONAL_ICON, CommitType
from prmate.grouping.group_model import ClassifiedCommits, Commit, ParsedCommit


class TestGroupModel(unittest.TestCase):
    def test_parsed_commit_is_immutable(self) -> None:
        parsed = ParsedCommit(
            commit=Commit(hash="a", subject="feat: x"),
            type=CommitType.FEAT,
            scope="Uncategorized",
            clean_subject="x",
        )
        with self.assertRaises(dataclasses.FrozenInstanceError):
            parsed.scope = "other"  # type: ignore[misc]
        self.assertTrue(parsed.is_conventional)

    def test_add_to_group_creates_and_appends(self) -> None:
        result = ClassifiedCommits()
        result.add_to_group("api", "- one")
        result.add_to_group("db", "- two")
        result.add_to_group("api", "- three")
        self.assertEqual(list(result.groups), ["api", "db"])
        self.assertEqual(result.groups["api"].entries, ["- one", "- three"])
        self.assertEqual(result.groups["api"].name, "api")
        self.assertEqual(result.total, 3)

    def test_empty_result_is_still_truthy(self) -> None:
        result = ClassifiedCommits()
        self.assertTrue(result)
        self.assertEqual(result.total, 0)


class TestCommitTypes(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertEqual(CommitType.FEAT.label, "✨ Features")
        self.assertEqual(CommitType.FIX.label, "🐛 Bug Fixes")
        self.assertEqual(CommitType.REVERT.label, "⏪ Reverts")
        self.assertEqual(CommitType.CI.title, "CI/CD")

    def test_every_type_has_a_label(self) -> None:
        self.assertEqual(set(_LABELS), set(CommitType))

    def test_every_type_has_distinct_label(self) -> None:
        labels = [member.label for member in CommitType]
        self.assertEqual(len(labels), len(set(labels)))

    def test_conventional_excludes_other(self) -> None:
        conventional = CommitType.conventional()
        self.assertNotIn(CommitType.OTHER, conventional)
        self.assertEqual(len(conventional), 11)
        self.assertEqual(CommitType.OTHER.icon, NON_CONVENTIONAL_ICON)


if __name__ == "__main__":
    unittest.main()
