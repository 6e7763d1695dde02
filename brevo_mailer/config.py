import os
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

# Load environment variables from ENV_FILE if specified, or .env.local, or .env
env_file = os.getenv('ENV_FILE')
if env_file:
    load_dotenv(Path(env_file))
else:
    # Try .env.local first, then fall back to .env
    env_local = Path(__file__).parent.parent / '.env.local'
    if env_local.exists():
        load_dotenv(env_local)
    else:
        load_dotenv()


def _number_from_env(key: str, fallback: Optional[int]) -> Optional[int]:
    """Extract integer from environment variable with fallback."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == '':
        return fallback

    try:
        return int(raw)
    except ValueError:
        return fallback


# Brevo API configuration
BREVO_API_KEY = os.getenv('BREVO_API_KEY')
BREVO_HOST = os.getenv('BREVO_HOST', 'api.brevo.com')
BREVO_PORT = _number_from_env('BREVO_PORT', None)

# Alternative to the three settings above, e.g. brevo+api://KEY@default
BREVO_DSN = os.getenv('BREVO_DSN')

HTTP_TIMEOUT_SECONDS = _number_from_env('HTTP_TIMEOUT_SECONDS', 30)


def get_brevo_config() -> Dict[str, Any]:
    """
    Provider configuration as expected by create_email_service().

    Returns:
        Mapping with the Brevo key, host, port and request timeout
    """
    return {
        'email_provider': 'brevo',
        'brevo_key': BREVO_API_KEY,
        'brevo_host': BREVO_HOST,
        'brevo_port': BREVO_PORT,
        'timeout': HTTP_TIMEOUT_SECONDS
    }
