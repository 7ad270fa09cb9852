import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# REST backend consumed by the portal
API_URL = os.getenv("API_URL", os.getenv("VITE_API_URL", "http://localhost:5000/api"))
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

SEARCH_DEBOUNCE_SECONDS = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.5"))
EMPLOYEE_PAGE_LIMIT = int(os.getenv("EMPLOYEE_PAGE_LIMIT", "10"))
WORKSPACE_LIMIT = int(os.getenv("WORKSPACE_LIMIT", "500"))

# If set, each workspace keeps its token/identity in a JSON file under this directory
STORAGE_DIR = os.getenv("STORAGE_DIR") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
