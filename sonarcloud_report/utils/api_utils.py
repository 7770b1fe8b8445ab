import base64

def basic_auth(username, api_key):
    """Encode the username:api_key pair for a Basic Authorization header."""
    return base64.b64encode(f"{username}:{api_key}".encode('utf-8')).decode('ascii')

def confluence_headers(username, api_key):
    """
    Prepare headers for Confluence attachment uploads.
    
    Args:
        username (str): Atlassian account email
        api_key (str): Atlassian API token
        
    Returns:
        dict: Request headers
    """
    return {
        'Authorization': f'Basic {basic_auth(username, api_key)}',
        'X-Atlassian-Token': 'no-check'
    }
