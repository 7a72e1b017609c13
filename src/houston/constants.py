from typing import Final

from houston import __version__

# Base of the Twilio API; resources are appended to this as
# "{TWILIO_API_BASE}/{AccountSid}/Resource.json"
TWILIO_API_BASE: Final = "https://api.twilio.com/2010-04-01/Accounts"

# Version string used in User-Agent generation
VERSION: Final = __version__

# Product token and project URL reported in the User-Agent header
PRODUCT: Final = "Twilio"
REPO_URL: Final = "github.com/theckman/houston/twilio"

# Transport defaults
DEFAULT_TIMEOUT: Final = 10.0  # seconds
DEFAULT_POOL_MAXSIZE: Final = 10
