import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from sonarcloud_report.collectors.row_aggregator import RowAggregator
from sonarcloud_report.errors import FetchError, TransientFetchError
from sonarcloud_report.models import Row
from sonarcloud_report.utils.date_utils import parse_analysis_date


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with linear backoff (attempt x backoff_seconds)."""
    max_attempts: int = 3
    backoff_seconds: float = 1.0


def select_main_branch(branches):
    """Return the first branch flagged as main, or None."""
    for branch in branches:
        if branch.get('isMain'):
            return branch
    return None


def latest_pull_request_details(pull_requests) -> Tuple[str, str]:
    """
    Contributor name and URL of the most recent pull request.

    Missing pull requests, contributors or URL all fall back to ''.
    """
    if not pull_requests:
        return '', ''

    latest = pull_requests[0]
    contributors = latest.get('contributors') or []
    contributor = (contributors[0].get('name') or '') if contributors else ''
    url = latest.get('url') or ''
    return contributor, url


class FetchCoordinator:
    """Fetches the main-branch snapshot of every project concurrently."""

    def __init__(self, client, logger, max_workers: int = 10,
                 retry_policy: Optional[RetryPolicy] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            client: SonarCloudClient shared by every worker
            logger: Logger instance
            max_workers: Worker thread cap, 0 for one thread per project
            retry_policy: Retry settings for the branch list call
            sleep: Backoff sleep function
        """
        self.client = client
        self.logger = logger
        self.max_workers = max_workers
        self.retry_policy = retry_policy or RetryPolicy()
        self.sleep = sleep

    def collect_rows(self, project_keys: List[str]) -> List[Row]:
        """
        Collect one row per project that has a main branch.

        Failures are isolated per project: they are logged and the project
        is left out of the result. Returns once every worker has finished,
        with rows ordered by project key.
        """
        aggregator = RowAggregator()
        if not project_keys:
            self.logger.warning("No projects to collect")
            return []

        workers = self.max_workers or len(project_keys)
        self.logger.info(f"Collecting {len(project_keys)} projects with {workers} worker(s)")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_project = {
                executor.submit(self._collect_project, project_key, aggregator): project_key
                for project_key in project_keys
            }
            for future in as_completed(future_to_project):
                project_key = future_to_project[future]
                exc = future.exception()
                if exc is not None:
                    self.logger.error(f"Worker for project {project_key} failed: {exc}")

        rows = aggregator.sorted_rows()
        self.logger.info(
            f"Collected {len(rows)} rows from {len(project_keys)} projects "
            f"({len(project_keys) - len(rows)} without a row)"
        )
        return rows

    def _collect_project(self, project_key, aggregator):
        """Fetch a single project and add its row to the aggregator."""
        try:
            row = self.fetch_project_row(project_key)
        except FetchError as e:
            self.logger.warning(f"Skipping project {project_key}: {str(e)}")
            return
        except Exception as e:
            self.logger.error(f"Skipping project {project_key} after unexpected error: {str(e)}", exc_info=True)
            return

        if row is None:
            self.logger.debug(f"Project {project_key} has no main branch")
            return

        aggregator.add(row)

    def fetch_project_row(self, project_key) -> Optional[Row]:
        """
        Build the row for one project.

        Returns:
            Row: Snapshot of the main branch, or None when no branch is main

        Raises:
            FetchError: the branch or pull request list could not be fetched
        """
        branches = self.fetch_branches(project_key)
        main_branch = select_main_branch(branches)
        if main_branch is None:
            return None

        pull_requests = self.client.list_pull_requests(project_key)
        contributor, url = latest_pull_request_details(pull_requests)

        status = main_branch.get('status') or {}
        return Row(
            project=project_key,
            branch=main_branch.get('name', ''),
            contributor=contributor,
            quality_gate_status=status.get('qualityGateStatus') or '',
            bugs=int(status.get('bugs') or 0),
            vulnerabilities=int(status.get('vulnerabilities') or 0),
            code_smells=int(status.get('codeSmells') or 0),
            analysis_date=parse_analysis_date(main_branch.get('analysisDate'), self.logger),
            url=url,
        )

    def fetch_branches(self, project_key):
        """
        Fetch the branch list, retrying dropped connections.

        Raises:
            TransientFetchError: every attempt lost its connection
            FetchError: a non-transient failure, not retried
        """
        max_attempts = self.retry_policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            try:
                return self.client.list_branches(project_key)
            except TransientFetchError as e:
                self.logger.warning(
                    f"[RETRY] {str(e)} for project {project_key} (attempt {attempt}/{max_attempts})"
                )
                if attempt == max_attempts:
                    raise TransientFetchError(
                        f"branch list failed after {max_attempts} attempts"
                    ) from e
                self.sleep(attempt * self.retry_policy.backoff_seconds)
