import logging
import unittest
from unittest.mock import Mock, patch

import pydantic
import requests

logging.disable(logging.CRITICAL)


def _response(payload, error=None):
    response = Mock()
    response.json = Mock(return_value=payload)
    response.raise_for_status = Mock(side_effect=error)
    return response


def _issue_payload(number, **extra):
    data = {
        "id": 500 + number,
        "number": number,
        "title": f"Issue {number}",
        "body": None,
        "updated_at": "2025-01-01T00:00:00Z",
        "comments": 0,
        "state": "closed",
        "labels": [],
    }
    data.update(extra)
    return data


class GitHubClientTests(unittest.TestCase):
    def _client(self):
        from ghmirror.services.github_client import GitHubClient

        return GitHubClient("secret", base_url="https://api.example/", timeout=5, session=requests.Session())

    def test_init_sets_bearer_auth_and_json_accept(self):
        client = self._client()

        self.assertEqual(client.base_url, "https://api.example")
        self.assertEqual(client.http.headers["Authorization"], "Bearer secret")
        self.assertEqual(client.http.headers["Accept"], "application/vnd.github+json")
        self.assertIn("User-Agent", client.http.headers)

    def test_list_issues_requests_all_states_oldest_first(self):
        client = self._client()

        with patch.object(client.http, "get", return_value=_response([_issue_payload(1)])) as get:
            issues = client.list_issues("octo", "hello", page=3, per_page=50)

        get.assert_called_once_with(
            "https://api.example/repos/octo/hello/issues",
            params={"state": "all", "sort": "created", "direction": "asc", "page": 3, "per_page": 50},
            timeout=5,
        )
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].number, 1)
        self.assertEqual(issues[0].id, 501)
        self.assertIsNone(issues[0].body)

    def test_list_comments_follows_pages_until_short_page(self):
        client = self._client()
        first = [{"id": i, "body": "x", "updated_at": "t"} for i in range(100)]
        second = [{"id": 100, "body": None, "updated_at": "t"}]

        with patch.object(client.http, "get", side_effect=[_response(first), _response(second)]) as get:
            comments = client.list_comments("octo", "hello", 7)

        self.assertEqual(len(comments), 101)
        self.assertEqual([c.kwargs["params"]["page"] for c in get.call_args_list], [1, 2])
        self.assertEqual(get.call_args_list[0].args[0], "https://api.example/repos/octo/hello/issues/7/comments")

    def test_http_error_propagates(self):
        client = self._client()
        failing = _response([], error=requests.HTTPError("401 Unauthorized"))

        with patch.object(client.http, "get", return_value=failing):
            with self.assertRaises(requests.HTTPError):
                client.list_issues("octo", "hello", page=1)

    def test_error_object_instead_of_list_is_rejected(self):
        client = self._client()

        with patch.object(client.http, "get", return_value=_response({"message": "Not Found"})):
            with self.assertRaises(ValueError):
                client.list_comments("octo", "hello", 1)

    def test_record_missing_required_field_is_rejected(self):
        client = self._client()
        broken = _issue_payload(1)
        del broken["number"]

        with patch.object(client.http, "get", return_value=_response([broken])):
            with self.assertRaises(pydantic.ValidationError):
                client.list_issues("octo", "hello", page=1)


if __name__ == "__main__":
    unittest.main()
