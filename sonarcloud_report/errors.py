class SonarCloudReportError(Exception):
    pass

class ConfigurationError(SonarCloudReportError):
    pass

class FetchError(SonarCloudReportError):
    pass

class TransientFetchError(FetchError):
    """The connection was dropped before a complete response arrived."""
    pass

class ReportOutputError(SonarCloudReportError):
    pass
