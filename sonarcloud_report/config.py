import os
from dataclasses import dataclass

from dotenv import load_dotenv

from sonarcloud_report.errors import ConfigurationError

# Required environment variables
REQUIRED_VARIABLES = (
    "SONARCLOUD_ORG",
    "SONARCLOUD_TOKEN",
    "CONFLUENCE_PAGEID",
    "CONFLUENCE_ORG_URL",
    "CONFLUENCE_API_KEY",
    "CONFLUENCE_USERNAME",
)

DEFAULT_SONARCLOUD_URL = "https://sonarcloud.io"
DEFAULT_MAX_WORKERS = 10
DEFAULT_OUTPUT_DIR = "."


@dataclass(frozen=True)
class ReportConfig:
    sonarcloud_org: str
    sonarcloud_token: str
    confluence_page_id: str
    confluence_org_url: str
    confluence_api_key: str
    confluence_username: str
    sonarcloud_url: str = DEFAULT_SONARCLOUD_URL
    # 0 means one worker per project
    max_workers: int = DEFAULT_MAX_WORKERS
    output_dir: str = DEFAULT_OUTPUT_DIR


def _parse_max_workers(value):
    try:
        max_workers = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"SONARCLOUD_MAX_WORKERS must be an integer, got '{value}'")
    if max_workers < 0:
        raise ConfigurationError("SONARCLOUD_MAX_WORKERS must not be negative")
    return max_workers


def load_config(environ=None, max_workers=None, output_dir=None):
    """
    Build the run configuration from the environment.

    A .env file in the working directory is loaded first when reading the
    process environment. Explicit keyword arguments override the optional
    environment values.

    Raises:
        ConfigurationError: a required variable is missing or a value is invalid
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        raise ConfigurationError(f"missing {', '.join(missing)} environment variable(s)")

    if max_workers is None:
        max_workers = environ.get("SONARCLOUD_MAX_WORKERS", DEFAULT_MAX_WORKERS)
    max_workers = _parse_max_workers(max_workers)

    if output_dir is None:
        output_dir = environ.get("REPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR

    return ReportConfig(
        sonarcloud_org=environ["SONARCLOUD_ORG"],
        sonarcloud_token=environ["SONARCLOUD_TOKEN"],
        confluence_page_id=environ["CONFLUENCE_PAGEID"],
        confluence_org_url=environ["CONFLUENCE_ORG_URL"].rstrip("/"),
        confluence_api_key=environ["CONFLUENCE_API_KEY"],
        confluence_username=environ["CONFLUENCE_USERNAME"],
        sonarcloud_url=(environ.get("SONARCLOUD_URL") or DEFAULT_SONARCLOUD_URL).rstrip("/"),
        max_workers=max_workers,
        output_dir=output_dir,
    )
