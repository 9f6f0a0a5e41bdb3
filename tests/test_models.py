"""Tests for data models."""

import pytest

from devops_bridge.models import (
    BridgeConfig,
    Connection,
    ErrorDetail,
    FetchResult,
    ImportRequest,
    ImportResult,
    JiraConfig,
    OrgConfig,
)


class TestConnection:
    """Tests for the Connection model."""

    def test_complete(self):
        assert Connection("token", "https://example.com").is_complete()

    @pytest.mark.parametrize(
        "token,url",
        [(None, "https://example.com"), ("token", None), ("", ""), (None, None)],
    )
    def test_incomplete(self, token, url):
        assert not Connection(token, url).is_complete()


class TestImportRequest:
    """Tests for the ImportRequest model."""

    def test_task_ids_become_tuple(self):
        request = ImportRequest("proj", "Project_1", ["10000", "10001"])
        assert request.task_ids == ("10000", "10001")

    def test_empty_task_ids_rejected(self):
        with pytest.raises(ValueError):
            ImportRequest("proj", "Project_1", ())

    def test_non_string_task_ids_rejected(self):
        with pytest.raises(ValueError):
            ImportRequest("proj", "Project_1", (10000,))


class TestResults:
    """Tests for result serialization."""

    def test_error_detail_omits_missing_fields(self):
        error = ErrorDetail(message="Network Error", url="https://example.com/x")
        assert error.to_dict() == {"message": "Network Error", "url": "https://example.com/x"}

    def test_error_detail_full(self):
        error = ErrorDetail(
            message="boom",
            url="https://example.com/x",
            details={"a": 1},
            status=500,
            status_text="Internal Server Error",
            request_body={"jiraTasks": ["1"]},
        )
        assert error.to_dict() == {
            "message": "boom",
            "url": "https://example.com/x",
            "details": {"a": 1},
            "status": 500,
            "statusText": "Internal Server Error",
            "requestBody": {"jiraTasks": ["1"]},
        }

    def test_failed_fetch_has_only_error(self):
        result = FetchResult.failed(ErrorDetail(message="x", url="u"))
        assert result.to_dict() == {"error": {"message": "x", "url": "u"}}

    def test_import_result_to_dict(self):
        result = ImportResult(
            created_work_item_ids=["0Hb1"],
            failed_jira_tasks=[],
            message="ok",
            success=True,
        )
        assert result.to_dict() == {
            "createdWorkItemIds": ["0Hb1"],
            "failedJiraTasks": [],
            "message": "ok",
            "success": True,
        }


class TestBridgeConfig:
    """Tests for the BridgeConfig model."""

    def test_to_dict_and_back(self):
        config = BridgeConfig(
            orgs={"me@example.com": OrgConfig("token", "https://example.com")},
            jira=JiraConfig(url="https://acme.atlassian.net", api_token="t", named_credential="MINE"),
        )

        restored = BridgeConfig.from_dict(config.to_dict())

        assert restored.orgs["me@example.com"].access_token == "token"
        assert restored.orgs["me@example.com"].instance_url == "https://example.com"
        assert restored.jira.named_credential == "MINE"
        assert restored.jira.is_configured()

    def test_defaults(self):
        config = BridgeConfig.from_dict({})
        assert config.orgs == {}
        assert config.jira.named_credential == "JIRA_CREDENTIAL"
        assert not config.jira.is_configured()
