"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_THRESHOLD_PERCENT = 75
DEFAULT_IDLE_TIMEOUT_SECONDS = 5 * 60
DEFAULT_IDLE_PROMPT_SECONDS = 60
DEFAULT_TEMPORARY_ACCESS_HOURS = 24

LEAVE_SUBJECT = "On Approved Leave"
LEAVE_TIMESTAMP = "All Day"
SYSTEM_TEACHER_NAME = "System"

# Persistence keys
USERS_KEY = "users-list"
STUDENTS_KEY = "students-list"
LEAVE_APPLICATIONS_KEY = "leave-applications"
EXAMS_KEY = "exams-list"
EXAM_SUBMISSIONS_KEY = "exam-submissions"
CURRENT_USER_KEY = "currentUser"
SCHEMA_VERSION_KEY = "schema-version"
