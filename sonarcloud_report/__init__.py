"""
sonarcloud_report - SonarCloud main-branch metrics to Confluence.

Collects quality gate status, bugs, vulnerabilities and code smells for the
main branch of every project in a SonarCloud organization, writes them to a
CSV file and attaches the file to a Confluence page.
"""

__version__ = "1.0.0"
