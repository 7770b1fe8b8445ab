from unittest.mock import MagicMock

import pytest

from sonarcloud_report.config import load_config
from sonarcloud_report.errors import ConfigurationError, FetchError, ReportOutputError
from sonarcloud_report.metrics_reporter import SonarCloudReporter


@pytest.fixture
def config(env, tmp_path):
    return load_config(environ=env, output_dir=str(tmp_path))


@pytest.fixture
def uploader():
    return MagicMock()


def test_run_collects_writes_and_uploads(config, logger, fake_client, uploader, branch_factory):
    fake_client.search_projects.return_value = ["b_project", "a_project", "no_main"]
    fake_client.list_branches.side_effect = lambda key: (
        [branch_factory("feature", is_main=False)] if key == "no_main" else [branch_factory()]
    )
    reporter = SonarCloudReporter(config, logger, client=fake_client, uploader=uploader)

    output_file = reporter.run()

    assert [row.project for row in reporter.rows] == ["a_project", "b_project"]
    uploader.upload.assert_called_once_with(output_file)
    with open(output_file, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert len(lines) == 3
    assert lines[1].startswith("a_project,main,Ada Lovelace,OK,3,1,12,05-03-2024,")
    fake_client.close.assert_called_once()

def test_rejected_token_is_fatal(config, logger, fake_client, uploader):
    fake_client.validate_token.return_value = False
    reporter = SonarCloudReporter(config, logger, client=fake_client, uploader=uploader)

    with pytest.raises(ConfigurationError):
        reporter.run()
    fake_client.search_projects.assert_not_called()
    uploader.upload.assert_not_called()

def test_project_search_failure_is_fatal(config, logger, fake_client, uploader):
    fake_client.search_projects.side_effect = FetchError("status 500")
    reporter = SonarCloudReporter(config, logger, client=fake_client, uploader=uploader)

    with pytest.raises(FetchError, match="Could not search projects"):
        reporter.run()
    uploader.upload.assert_not_called()
    fake_client.close.assert_called_once()

def test_skipped_projects_do_not_fail_the_run(config, logger, fake_client, uploader):
    fake_client.search_projects.return_value = ["a_project"]
    fake_client.list_branches.side_effect = FetchError("status 403")
    reporter = SonarCloudReporter(config, logger, client=fake_client, uploader=uploader)

    reporter.run()

    assert reporter.rows == []
    uploader.upload.assert_called_once()

def test_upload_failure_propagates(config, logger, fake_client, uploader):
    fake_client.search_projects.return_value = ["a_project"]
    uploader.upload.side_effect = ReportOutputError("failed to upload file, status: 403 Forbidden")
    reporter = SonarCloudReporter(config, logger, client=fake_client, uploader=uploader)

    with pytest.raises(ReportOutputError):
        reporter.run()
