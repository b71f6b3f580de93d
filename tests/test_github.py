from unittest.mock import MagicMock, patch

import pytest

from plugbox import github

REPO = {
    "full_name": "someone/thing",
    "description": "a thing",
    "watchers": 11,
    "forks": 4,
    "open_issues": 2,
    "language": "Go",
    "license": {"key": "mit"},
    "pushed_at": "2022-12-10T00:00:00Z",
    "html_url": "https://github.example.com/someone/thing",
}


def _response(status, body):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    return resp


def test_notnull():
    assert github.notnull("") == "None"
    assert github.notnull("Go") == "Go"


def test_parse_command():
    assert github.parse_command(">github -p foo bar") == ("-p ", "foo bar")
    assert github.parse_command(">github foo") == ("", "foo")
    assert github.parse_command("github foo") is None


def test_search_returns_first_item():
    body = {"total_count": 2, "items": [REPO, {"full_name": "other/one"}]}
    with patch("plugbox.github.requests.get", return_value=_response(200, body)) as get:
        repo = github.search("thing")
    assert repo == REPO
    assert get.call_args.kwargs["params"] == {"q": "thing"}


def test_search_nothing_found():
    body = {"total_count": 0, "items": []}
    with patch("plugbox.github.requests.get", return_value=_response(200, body)):
        with pytest.raises(LookupError):
            github.search("nothing")


def test_search_bad_status():
    with patch("plugbox.github.requests.get", return_value=_response(403, {})):
        with pytest.raises(RuntimeError, match="403"):
            github.search("thing")


def test_format_repo():
    text = github.format_repo(REPO)
    assert text.startswith("someone/thing\nDescription: a thing\n")
    assert "Star/Fork/Issue: 11/4/2\n" in text
    assert "License: MIT\n" in text
    assert text.endswith("Jump: https://github.example.com/someone/thing\n")


def test_format_repo_missing_fields():
    text = github.format_repo({"full_name": "a/b", "license": None, "description": None})
    assert "Language: None\n" in text
    assert "License: None\n" in text
    assert "Description: \n" in text


def test_image_url():
    assert github.image_url(REPO) == github.IMAGE_BASE + "someone/thing"