import os

import requests

from sonarcloud_report.errors import ReportOutputError
from sonarcloud_report.utils.api_utils import confluence_headers

UPLOAD_TIMEOUT = 60
SUCCESS_STATUSES = (200, 201)


class ConfluenceUploader:
    """Attaches report files to a Confluence page."""

    def __init__(self, org_url, page_id, username, api_key, logger):
        self.org_url = org_url.rstrip('/')
        self.page_id = page_id
        self.headers = confluence_headers(username, api_key)
        self.logger = logger

    @property
    def attachment_url(self):
        return f"{self.org_url}/wiki/rest/api/content/{self.page_id}/child/attachment"

    def upload(self, file_path):
        """
        Upload a file as a page attachment.

        Args:
            file_path (str): Path of the file to attach

        Raises:
            ReportOutputError: the file could not be read, the request failed
                or Confluence answered with a status other than 200/201
        """
        file_name = os.path.basename(file_path)
        self.logger.info(f"Uploading {file_name} to Confluence page {self.page_id}")

        try:
            with open(file_path, 'rb') as fh:
                response = requests.post(
                    self.attachment_url,
                    headers=self.headers,
                    files={'file': (file_name, fh, 'text/csv')},
                    data={'minorEdit': 'true'},
                    timeout=UPLOAD_TIMEOUT
                )
        # RequestException subclasses OSError, so it is matched first
        except requests.exceptions.RequestException as e:
            raise ReportOutputError(f"failed to send request: {str(e)}") from e
        except OSError as e:
            raise ReportOutputError(f"failed to open file {file_path}: {str(e)}") from e

        if response.status_code not in SUCCESS_STATUSES:
            raise ReportOutputError(
                f"failed to upload file, status: {response.status_code} {response.reason}"
            )

        self.logger.info(f"Uploaded {file_name} (status {response.status_code})")
        return response
