import requests
from requests.adapters import HTTPAdapter

from sonarcloud_report.errors import FetchError, TransientFetchError

# Sized for one in-flight request per worker thread
POOL_SIZE = 100
PAGE_SIZE = 500
REQUEST_TIMEOUT = 30


class SonarCloudClient:
    """Read-only client for the SonarCloud web API."""

    def __init__(self, organization, token, logger, base_url='https://sonarcloud.io', session=None):
        """Initialize the client with a pooled session shared by all workers."""
        self.organization = organization
        self.logger = logger
        self.base_url = base_url.rstrip('/')
        self.session = session or self._build_session(token)

    @staticmethod
    def _build_session(token):
        session = requests.Session()
        # SonarCloud takes the token as the basic auth user with no password
        session.auth = (token, '')
        session.headers.update({'Accept': 'application/json'})
        adapter = HTTPAdapter(pool_connections=POOL_SIZE, pool_maxsize=POOL_SIZE)
        session.mount('https://', adapter)
        session.mount('http://', adapter)
        return session

    def _get(self, path, params=None):
        """
        Perform a GET request and return the decoded JSON body.

        Raises:
            TransientFetchError: the connection dropped before the response completed
            FetchError: any other request failure, non-200 status or invalid body
        """
        url = f'{self.base_url}{path}'
        try:
            response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        # ConnectTimeout subclasses ConnectionError; timeouts are not retried
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Request to {path} timed out: {str(e)}") from e
        except (requests.exceptions.ConnectionError, requests.exceptions.ChunkedEncodingError) as e:
            raise TransientFetchError(f"Connection dropped calling {path}: {str(e)}") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request to {path} failed: {str(e)}") from e

        if response.status_code != 200:
            raise FetchError(f"{path} returned status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"{path} returned an invalid JSON body") from e

    def validate_token(self):
        """Check that the configured token is accepted by SonarCloud."""
        data = self._get('/api/authentication/validate')
        return bool(data.get('valid', False))

    def search_projects(self):
        """
        List every project key of the organization.

        Walks all result pages of /api/projects/search.

        Returns:
            list: Project keys in API order
        """
        project_keys = []
        page = 1
        while True:
            data = self._get(
                '/api/projects/search',
                params={
                    'organization': self.organization,
                    'p': page,
                    'ps': PAGE_SIZE
                }
            )
            components = data.get('components') or []
            project_keys.extend(component['key'] for component in components if component.get('key'))

            total = (data.get('paging') or {}).get('total')
            if total is None:
                # Without a total, only a short page marks the end
                if len(components) < PAGE_SIZE:
                    break
            elif not components or page * PAGE_SIZE >= total:
                break
            page += 1

        self.logger.debug(f"Fetched {len(project_keys)} project keys in {page} page(s)")
        return project_keys

    def list_branches(self, project_key):
        """Fetch the branches of a project."""
        data = self._get('/api/project_branches/list', params={'project': project_key})
        return data.get('branches') or []

    def list_pull_requests(self, project_key):
        """Fetch the pull requests of a project, most recent first."""
        data = self._get('/api/project_pull_requests/list', params={'project': project_key})
        return data.get('pullRequests') or []

    def close(self):
        self.session.close()
