SECRET_KEY = "test-secret"

API_URL = "http://backend.test/api"
API_TIMEOUT = 5.0

SEARCH_DEBOUNCE_SECONDS = 0.05
EMPLOYEE_PAGE_LIMIT = 10
WORKSPACE_LIMIT = 20

STORAGE_DIR = None

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
