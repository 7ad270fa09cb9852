import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_URL = os.getenv("API_URL", "http://localhost:5000/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

SEARCH_DEBOUNCE_SECONDS = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.5"))
EMPLOYEE_PAGE_LIMIT = int(os.getenv("EMPLOYEE_PAGE_LIMIT", "10"))
WORKSPACE_LIMIT = int(os.getenv("WORKSPACE_LIMIT", "500"))

STORAGE_DIR = os.getenv("STORAGE_DIR") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
