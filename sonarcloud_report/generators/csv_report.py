import os

import pandas as pd

from sonarcloud_report.errors import ReportOutputError
from sonarcloud_report.models import REPORT_HEADER
from sonarcloud_report.utils.date_utils import get_file_timestamp


def generate_file_name(base_name='sonarcloud', extension='csv', now=None):
    """File name with the current date and time, e.g. sonarcloud_2024-03-05_10-15-00.csv"""
    return f"{base_name}_{get_file_timestamp(now)}.{extension}"


class CsvReportGenerator:
    """Writes the collected rows to a CSV report."""

    def __init__(self, logger):
        """Initialize the report generator."""
        self.logger = logger

    def build_dataframe(self, rows):
        """Tabulate rows under the fixed report header."""
        df = pd.DataFrame([row.to_record() for row in rows], columns=REPORT_HEADER)
        for column in ('Bugs', 'Vulnerabilities', 'CodeSmells'):
            df[column] = df[column].astype('int64')
        return df

    def generate_report(self, rows, output_dir, file_name=None):
        """
        Write the CSV report.

        Args:
            rows (List[Row]): Rows to write, in output order
            output_dir (str): Directory receiving the file, created if missing
            file_name (str): Optional file name, generated from the current time by default

        Returns:
            str: Path of the written file

        Raises:
            ReportOutputError: the file could not be created or written
        """
        file_name = file_name or generate_file_name()
        output_file = os.path.join(output_dir, file_name)

        try:
            self.logger.info(f"Generating CSV report with {len(rows)} rows")
            os.makedirs(output_dir, exist_ok=True)
            df = self.build_dataframe(rows)
            df.to_csv(output_file, index=False, encoding='utf-8')
        except OSError as e:
            raise ReportOutputError(f"failed to write CSV file {output_file}: {str(e)}") from e

        self.logger.info(f"Saved CSV report: {output_file}")
        return output_file
