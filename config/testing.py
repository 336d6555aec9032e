SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_PATH = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "school_portal_test",
}

ATTENDANCE_THRESHOLD = 75
IDLE_TIMEOUT_SECONDS = 300
IDLE_PROMPT_SECONDS = 60

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
