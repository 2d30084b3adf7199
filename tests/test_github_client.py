import pytest

from devchallenges.config import Settings
from devchallenges.infrastructure.github_client import (
    DISCUSSION_QUERY,
    DISCUSSIONS_QUERY,
    GitHubAPIError,
    GitHubClient,
    GraphQLError,
    MissingTokenError,
)
from conftest import DISCUSSION_DETAIL_NODE, make_discussion_node, make_issue, make_response


def test_token_sent_as_bearer(client) -> None:
    assert client.headers["Authorization"] == "Bearer test-token"
    assert client.headers["User-Agent"] == "DevChallenges-App"


def test_no_authorization_header_without_token(settings_no_token, session) -> None:
    client = GitHubClient(settings_no_token, session=session)
    assert "Authorization" not in client.headers
    assert client.has_token is False


def test_get_discussions_uses_variables(client, session) -> None:
    nodes = [make_discussion_node(1), make_discussion_node(2)]
    session.post.return_value = make_response(
        {"data": {"repository": {"discussions": {"nodes": nodes}}}}
    )

    assert client.get_discussions(6) == nodes

    _, kwargs = session.post.call_args
    assert session.post.call_args[0][0] == "https://api.github.com/graphql"
    assert kwargs["json"]["query"] == DISCUSSIONS_QUERY
    assert kwargs["json"]["variables"] == {
        "owner": "yoanbernabeu",
        "name": "DevChallenges",
        "limit": 6,
    }
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 30


def test_get_discussions_caps_limit(client, session) -> None:
    session.post.return_value = make_response({"data": {"repository": None}})

    assert client.get_discussions(500) == []
    assert session.post.call_args[1]["json"]["variables"]["limit"] == 100


def test_get_discussion_returns_node(client, session) -> None:
    session.post.return_value = make_response({"data": {"node": DISCUSSION_DETAIL_NODE}})

    assert client.get_discussion("D_kwDOabc123") == DISCUSSION_DETAIL_NODE
    kwargs = session.post.call_args[1]
    assert kwargs["json"]["query"] == DISCUSSION_QUERY
    assert kwargs["json"]["variables"] == {"id": "D_kwDOabc123", "commentLimit": 20}


@pytest.mark.parametrize("node", [None, {}])
def test_get_discussion_absent_or_other_type(client, session, node) -> None:
    session.post.return_value = make_response({"data": {"node": node}})
    assert client.get_discussion("I_kwDOissue") is None


def test_graphql_without_token_raises(settings_no_token, session) -> None:
    client = GitHubClient(settings_no_token, session=session)
    with pytest.raises(MissingTokenError):
        client.get_discussions(6)
    session.post.assert_not_called()


def test_graphql_http_error_raises(client, session) -> None:
    session.post.return_value = make_response({}, status_code=502, reason="Bad Gateway")
    with pytest.raises(GitHubAPIError) as excinfo:
        client.get_discussions(6)
    assert excinfo.value.status_code == 502


def test_graphql_errors_raise(client, session) -> None:
    errors = [{"message": "Could not resolve to a node with the global id"}]
    session.post.return_value = make_response({"data": None, "errors": errors})
    with pytest.raises(GraphQLError) as excinfo:
        client.get_discussion("bogus")
    assert excinfo.value.errors == errors


def test_search_issues_query(client, session) -> None:
    items = [make_issue(1, "alice"), make_issue(2, "bob")]
    session.get.return_value = make_response({"total_count": 2, "items": items})

    assert client.search_issues("#WEEK-042") == items

    args, kwargs = session.get.call_args
    assert args[0] == "https://api.github.com/search/issues"
    assert kwargs["params"] == {"q": 'repo:yoanbernabeu/DevChallenges is:issue "#WEEK-042"'}


def test_search_issues_http_error(client, session) -> None:
    session.get.return_value = make_response({}, status_code=422, reason="Unprocessable Entity")
    with pytest.raises(GitHubAPIError):
        client.search_issues("")


def test_get_issue_comments_path(session) -> None:
    settings = Settings(repo_owner="acme", repo_name="challenges", api_url="https://ghe.example/api/v3")
    client = GitHubClient(settings, session=session)
    session.get.return_value = make_response([])

    assert client.get_issue_comments(12) == []
    assert session.get.call_args[0][0] == "https://ghe.example/api/v3/repos/acme/challenges/issues/12/comments"


@pytest.mark.parametrize("payload", [["unexpected"], "text", None])
def test_graphql_non_object_body_raises_value_error(client, session, payload) -> None:
    session.post.return_value = make_response(payload)
    with pytest.raises(ValueError):
        client.get_discussions(6)


def test_graphql_non_object_data_raises_value_error(client, session) -> None:
    session.post.return_value = make_response({"data": ["unexpected"]})
    with pytest.raises(ValueError):
        client.get_discussion("D_1")


def test_search_issues_non_object_body_raises_value_error(client, session) -> None:
    session.get.return_value = make_response(["unexpected"])
    with pytest.raises(ValueError):
        client.search_issues("#WEEK-042")


def test_search_issues_items_not_a_list_raises_value_error(client, session) -> None:
    session.get.return_value = make_response({"items": {"number": 1}})
    with pytest.raises(ValueError):
        client.search_issues("#WEEK-042")


def test_issue_comments_non_list_body_raises_value_error(client, session) -> None:
    session.get.return_value = make_response({"message": "Moved Permanently"})
    with pytest.raises(ValueError):
        client.get_issue_comments(7)
