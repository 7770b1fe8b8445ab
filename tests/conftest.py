import logging
from unittest.mock import MagicMock

import pytest

from sonarcloud_report.models import Row


def make_branch(name="main", is_main=True, analysis_date="2024-03-05T10:15:00+0000",
                quality_gate_status="OK", bugs=3, vulnerabilities=1, code_smells=12):
    return {
        "name": name,
        "isMain": is_main,
        "type": "LONG" if is_main else "SHORT",
        "status": {
            "qualityGateStatus": quality_gate_status,
            "bugs": bugs,
            "vulnerabilities": vulnerabilities,
            "codeSmells": code_smells,
        },
        "analysisDate": analysis_date,
    }


def make_pull_request(contributor="Ada Lovelace", url="https://github.com/acme/app/pull/42"):
    pr = {
        "key": "42",
        "title": "Add feature",
        "branch": "feature/x",
        "base": "main",
        "url": url,
        "contributors": [],
    }
    if contributor is not None:
        pr["contributors"].append({"name": contributor, "login": "ada"})
    return pr


@pytest.fixture
def logger():
    return logging.getLogger("sonarcloud_report.tests")


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.validate_token.return_value = True
    client.search_projects.return_value = []
    client.list_branches.return_value = [make_branch()]
    client.list_pull_requests.return_value = [make_pull_request()]
    return client


@pytest.fixture
def sample_rows():
    return [
        Row(
            project="x",
            branch="main",
            contributor="",
            quality_gate_status="OK",
            bugs=3,
            vulnerabilities=0,
            code_smells=7,
            analysis_date="05-03-2024",
            url="",
        ),
        Row(
            project="y",
            branch="master",
            contributor="Grace Hopper",
            quality_gate_status="ERROR",
            bugs=0,
            vulnerabilities=2,
            code_smells=0,
            analysis_date="",
            url="https://github.com/acme/y/pull/7",
        ),
    ]


@pytest.fixture
def env():
    return {
        "SONARCLOUD_ORG": "acme",
        "SONARCLOUD_TOKEN": "sonar-token",
        "CONFLUENCE_PAGEID": "123456",
        "CONFLUENCE_ORG_URL": "https://acme.atlassian.net/",
        "CONFLUENCE_API_KEY": "atl-key",
        "CONFLUENCE_USERNAME": "bot@acme.io",
    }


@pytest.fixture
def branch_factory():
    return make_branch


@pytest.fixture
def pull_request_factory():
    return make_pull_request
