import json
import sys
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import requests

from prmate.update import update_checker
from prmate.update.update_checker import (
    UpdateChecker,
    UpdateError,
    installed_commit_from_metadata,
)


INSTALLED_SHA = "0123456789abcdef0123456789abcdef01234567"
NEWER_SHA = "fedcba9876543210fedcba9876543210fedcba98"


class DummyResponse(SimpleNamespace):
    pass


class DummyDistribution:
    def __init__(self, direct_url):
        self.direct_url = direct_url

    def read_text(self, filename):
        assert filename == "direct_url.json"
        return self.direct_url


class TestUpdateChecker(unittest.TestCase):
    def _checker(self, installed_commit=INSTALLED_SHA) -> UpdateChecker:
        return UpdateChecker(
            update_url="https://api.example.com/repos/o/prmate/commits/master",
            install_source="git+https://example.com/prmate.git",
            request_timeout=3,
            installed_commit=installed_commit,
        )

    def test_up_to_date(self) -> None:
        def fake_get(url, *_args, **kwargs):
            self.assertEqual(url, "https://api.example.com/repos/o/prmate/commits/master")
            self.assertEqual(kwargs["headers"]["Accept"], "application/vnd.github.sha")
            self.assertEqual(kwargs["headers"]["Cache-Control"], "no-cache")
            self.assertEqual(kwargs["timeout"], 3)
            return DummyResponse(status_code=200, text=INSTALLED_SHA + "\n")

        with patch("requests.get", fake_get):
            self.assertFalse(self._checker().is_update_available())

    def test_new_commit_is_an_update_whatever_module_changed(self) -> None:
        # The check never looks at file contents, so an upstream commit that
        # only touches e.g. grouping/commit_parser.py is still detected.
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=NEWER_SHA)

        with patch("requests.get", fake_get):
            with patch("pathlib.Path.read_bytes") as read_bytes:
                self.assertTrue(self._checker().is_update_available())
        read_bytes.assert_not_called()

    def test_abbreviated_installed_sha_matches(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text=INSTALLED_SHA)

        with patch("requests.get", fake_get):
            self.assertFalse(self._checker(installed_commit=INSTALLED_SHA[:7]).is_update_available())

    def test_error_status(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=404, text="Not Found")

        with patch("requests.get", fake_get):
            with self.assertRaises(UpdateError):
                self._checker().is_update_available()

    def test_answer_that_is_not_a_sha(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text="<html>rate limited</html>")

        with patch("requests.get", fake_get):
            with self.assertRaises(UpdateError):
                self._checker().fetch_latest_commit()

    def test_network_error(self) -> None:
        def fake_get(url, *_args, **kwargs):
            raise requests.ConnectionError("offline")

        with patch("requests.get", fake_get):
            with self.assertRaises(UpdateError):
                self._checker().is_update_available()

    def test_local_commit_from_install_metadata(self) -> None:
        with patch.object(update_checker, "installed_commit_from_metadata", return_value=NEWER_SHA):
            with patch.object(update_checker, "get_git_head_sha") as head:
                self.assertEqual(self._checker(installed_commit=None).local_commit(), NEWER_SHA)
        head.assert_not_called()

    def test_local_commit_falls_back_to_checkout(self) -> None:
        with patch.object(update_checker, "installed_commit_from_metadata", return_value=None):
            with patch.object(update_checker, "get_git_head_sha", return_value=INSTALLED_SHA):
                self.assertEqual(self._checker(installed_commit=None).local_commit(), INSTALLED_SHA)

    def test_unknown_local_commit(self) -> None:
        with patch.object(update_checker, "installed_commit_from_metadata", return_value=None):
            with patch.object(update_checker, "get_git_head_sha", return_value=None):
                with self.assertRaises(UpdateError):
                    self._checker(installed_commit=None).local_commit()

    @patch("prmate.update.update_checker.subprocess.run")
    def test_reinstall(self, mock_run) -> None:
        mock_run.return_value = SimpleNamespace(returncode=0, stdout="", stderr="")
        self._checker().reinstall()
        cmd = mock_run.call_args[0][0]
        self.assertEqual(cmd[:4], [sys.executable, "-m", "pip", "install"])
        self.assertIn("--force-reinstall", cmd)
        self.assertEqual(cmd[-1], "git+https://example.com/prmate.git")

    @patch("prmate.update.update_checker.subprocess.run")
    def test_reinstall_failure(self, mock_run) -> None:
        mock_run.return_value = SimpleNamespace(returncode=1, stdout="", stderr="ERROR: no such repo")
        with self.assertRaises(UpdateError) as ctx:
            self._checker().reinstall()
        self.assertIn("no such repo", str(ctx.exception))


class TestInstalledCommitFromMetadata(unittest.TestCase):
    def _with_direct_url(self, direct_url):
        dist = DummyDistribution(direct_url)
        with patch.object(update_checker.metadata, "distribution", return_value=dist):
            return installed_commit_from_metadata()

    def test_vcs_install(self) -> None:
        direct_url = json.dumps({
            "url": "https://github.com/o/prmate.git",
            "vcs_info": {"vcs": "git", "commit_id": INSTALLED_SHA},
        })
        self.assertEqual(self._with_direct_url(direct_url), INSTALLED_SHA)

    def test_non_vcs_install(self) -> None:
        self.assertIsNone(self._with_direct_url(json.dumps({"url": "file:///src", "dir_info": {}})))
        self.assertIsNone(self._with_direct_url(None))
        self.assertIsNone(self._with_direct_url("{not json"))

    def test_not_installed(self) -> None:
        with patch.object(
            update_checker.metadata,
            "distribution",
            side_effect=update_checker.metadata.PackageNotFoundError("prmate"),
        ):
            self.assertIsNone(installed_commit_from_metadata())


if __name__ == "__main__":
    unittest.main()
