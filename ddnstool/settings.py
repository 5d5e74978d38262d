import os

from dotenv import load_dotenv
load_dotenv()

def _bool(name, default=False):
    """Parse a boolean environment variable with sensible defaults.

    Reads the environment variable `name` and interprets truthy values in a
    case-insensitive manner. Recognized truthy strings are: "1", "true",
    "yes", and "on". If the variable is unset, returns `default`.

    Args:
        name (str): Environment variable name to read.
        default (bool, optional): Value to return when the variable is unset.
            Defaults to False.

    Returns:
        bool: Parsed boolean value from the environment or the provided default.
    """
    v = os.getenv(name)
    if v is None:
        return default
    return v.lower() in {"1","true","yes","on"}

# Flask
FLASK_ENV = os.getenv("FLASK_ENV", "local")
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "")
FLASK_APP = os.getenv("FLASK_APP", "ddnstool")
FLASK_DEBUG = _bool("FLASK_DEBUG", False)

# Cloudflare
# ==========================================================================
CF_API_BASE = os.getenv("CF_API_BASE", "https://api.cloudflare.com/client/v4/")
CF_API_TOKEN = os.getenv("CF_API_TOKEN", "")
CF_REQUEST_TIMEOUT = int(os.getenv("CF_REQUEST_TIMEOUT", "30"))

# Other application values
# ==========================================================================
DEFAULT_PROXIED = _bool("DEFAULT_PROXIED", False)
LOG_ENABLED = _bool("LOG_ENABLED", False)
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s L%(lineno)d - %(levelname)s - %(message)s")
