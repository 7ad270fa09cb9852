"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.5
DEFAULT_PAGE_LIMIT = 10
# Signed-in browser workspaces kept in memory; the least recently used is closed beyond this.
DEFAULT_WORKSPACE_LIMIT = 500

# The only two keys of persisted client state. Written by SessionStore alone.
TOKEN_STORAGE_KEY = "token"
IDENTITY_STORAGE_KEY = "user"

LOGIN_PATH = "/login"
HOME_PATH = "/"
PENDING_APPROVAL_PATH = "/pending-approval"
