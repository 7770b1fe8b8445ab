# utils/date_utils.py
import re
from datetime import datetime
import pytz

# SonarCloud timestamps look like 2024-03-05T10:15:00+0000
ANALYSIS_DATE_FORMAT = '%Y-%m-%dT%H:%M:%S%z'
# strptime alone also takes 'Z', '+00:00' and unpadded fields
ANALYSIS_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}')
REPORT_DATE_FORMAT = '%d-%m-%Y'
FILE_TIMESTAMP_FORMAT = '%Y-%m-%d_%H-%M-%S'

def parse_analysis_date(date_str, logger):
    """
    Convert a SonarCloud analysis timestamp into the report's DD-MM-YYYY form.
    
    Args:
        date_str (str): Timestamp as returned by the branches API
        logger: Logger instance for error reporting
        
    Returns:
        str: Formatted date, or '' when the value is missing or invalid
    """
    if not date_str or date_str == 'null':
        return ''
    
    try:
        if not ANALYSIS_DATE_PATTERN.fullmatch(date_str):
            raise ValueError("expected YYYY-MM-DDTHH:MM:SS+HHMM")
        date_obj = datetime.strptime(date_str, ANALYSIS_DATE_FORMAT)
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid analysis date format '{date_str}': {str(e)}")
        return ''
    
    return date_obj.strftime(REPORT_DATE_FORMAT)

def get_file_timestamp(now=None):
    """
    Timestamp used in generated file names.
    
    Report names are stamped in UTC so runs from different CI hosts sort together.
    
    Args:
        now (datetime): Optional moment to format, defaults to the current UTC time
        
    Returns:
        str: Timestamp in YYYY-MM-DD_HH-MM-SS format
    """
    if now is None:
        now = datetime.now(pytz.UTC)
    return now.strftime(FILE_TIMESTAMP_FORMAT)
