import unittest

from prmate.formatting.line_renderer import commit_url, render_line
from prmate.grouping.commit_parser import parse_commit
from prmate.grouping.group_model import Commit


class TestLineRenderer(unittest.TestCase):
    def test_normal_commit_uses_type_label(self) -> None:
        parsed = parse_commit(Commit(hash="a1b2c3", subject="perf(db): faster queries"))
        self.assertEqual(
            render_line(parsed, "https://github.com/org/repo"),
            "- ⚡ Performance [faster queries](https://github.com/org/repo/commit/a1b2c3)",
        )

    def test_breaking_commit_uses_warning_icon(self) -> None:
        parsed = parse_commit(
            Commit(hash="fff000", subject="feat: new api", full_message="feat: new api\n\nBREAKING CHANGE: v1 gone")
        )
        self.assertEqual(
            render_line(parsed, "https://github.com/org/repo"),
            "- ⚠️ [new api](https://github.com/org/repo/commit/fff000)",
        )

    def test_non_conventional_commit_keeps_subject(self) -> None:
        parsed = parse_commit(Commit(hash="789abc", subject="Merge branch 'main' into feature"))
        self.assertEqual(
            render_line(parsed, "https://github.com/org/repo"),
            "- 🗑️ [Merge branch 'main' into feature](https://github.com/org/repo/commit/789abc)",
        )

    def test_commit_url_ignores_trailing_slash(self) -> None:
        self.assertEqual(commit_url("https://gitlab.com/a/b/", "123"), "https://gitlab.com/a/b/commit/123")


if __name__ == "__main__":
    unittest.main()
