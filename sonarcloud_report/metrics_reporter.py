from sonarcloud_report.collectors.fetch_coordinator import FetchCoordinator
from sonarcloud_report.collectors.sonarcloud_client import SonarCloudClient
from sonarcloud_report.errors import ConfigurationError, FetchError
from sonarcloud_report.generators.csv_report import CsvReportGenerator
from sonarcloud_report.uploaders.confluence_uploader import ConfluenceUploader


class SonarCloudReporter:
    """
    Orchestrates one batch run: fetch project metrics, write the CSV report
    and attach it to the Confluence page.
    """

    def __init__(self, config, logger, client=None, uploader=None, coordinator=None):
        """Initialize reporter with configuration and collaborators."""
        self.config = config
        self.logger = logger
        self.client = client or SonarCloudClient(
            config.sonarcloud_org,
            config.sonarcloud_token,
            logger,
            base_url=config.sonarcloud_url
        )
        self.uploader = uploader or ConfluenceUploader(
            config.confluence_org_url,
            config.confluence_page_id,
            config.confluence_username,
            config.confluence_api_key,
            logger
        )
        self.coordinator = coordinator or FetchCoordinator(
            self.client,
            logger,
            max_workers=config.max_workers
        )
        self.generator = CsvReportGenerator(logger)
        self.rows = []

    def run(self):
        """
        Execute the full reporting workflow.

        Returns:
            str: Path of the uploaded CSV file

        Raises:
            ConfigurationError: the SonarCloud token was rejected
            FetchError: the project list could not be fetched
            ReportOutputError: the report could not be written or uploaded
        """
        try:
            self.logger.info(f"Validating SonarCloud authentication for {self.config.sonarcloud_org}...")
            if not self.client.validate_token():
                raise ConfigurationError("SONARCLOUD_TOKEN was rejected by SonarCloud")

            try:
                project_keys = self.client.search_projects()
            except FetchError as e:
                raise FetchError(f"Could not search projects: {str(e)}") from e
            self.logger.info(f"Found {len(project_keys)} projects in {self.config.sonarcloud_org}")

            self.rows = self.coordinator.collect_rows(project_keys)
        finally:
            self.client.close()

        output_file = self.generator.generate_report(self.rows, self.config.output_dir)
        self.uploader.upload(output_file)
        self.logger.info(f"CSV file generated and uploaded successfully: {output_file}")
        return output_file
