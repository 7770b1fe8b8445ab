# main.py
import argparse
import sys

from sonarcloud_report.config import load_config
from sonarcloud_report.errors import SonarCloudReportError
from sonarcloud_report.metrics_reporter import SonarCloudReporter
from sonarcloud_report.utils.logging_utils import setup_logger

LOGGER_NAME = 'sonarcloud_report'

def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='SonarCloud main-branch metrics report for Confluence')
    parser.add_argument('--output-dir', help='Directory for the CSV report (default: REPORT_OUTPUT_DIR or current directory)')
    parser.add_argument('--max-workers', type=int, help='Concurrent project fetches, 0 for one per project (default: SONARCLOUD_MAX_WORKERS or 10)')
    parser.add_argument('--log-dir', default='logs', help='Directory for log files (default: logs)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)

def main(argv=None):
    """Main execution flow."""
    args = parse_arguments(argv)
    logger = setup_logger(LOGGER_NAME, verbose=args.verbose, log_dir=args.log_dir)

    print("\nSonarCloud Metrics Reporter")
    print("===========================")

    try:
        config = load_config(max_workers=args.max_workers, output_dir=args.output_dir)
        reporter = SonarCloudReporter(config, logger)
        output_file = reporter.run()
    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        sys.exit(130)
    except SonarCloudReportError as e:
        logger.error(f"{type(e).__name__}: {str(e)}")
        sys.exit(1)

    print(f"\nReport successfully uploaded: {output_file}")

if __name__ == "__main__":
    main()
