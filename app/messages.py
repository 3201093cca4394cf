"""User-facing response messages.

Error responses carry fixed messages only; internal details are logged,
never returned to clients.
"""

# Errors
NO_TOKEN = "No token provided"
UNAUTHORIZED = "Unauthorized"
EMAIL_EXISTS = "Email already exists"
INVALID_CREDENTIALS = "Invalid email or password"
SERVER_ERROR = "Internal server error"
ACCESS_DENIED = "Access denied"
REGISTER_ERROR = "Error registering user"
LOGIN_ERROR = "Error logging in"
ADVICE_ERROR = "Error retrieving advice"
TRANSLATE_ERROR = "Error retrieving translation"
DELETE_PROFILE_ERROR = "Failed to delete profile."
REQUEST_COUNT_ERROR = "Error retrieving request count"
USER_REQUESTS_ERROR = "Error retrieving user request data"
API_STATS_ERROR = "Error retrieving API stats"
UPDATE_REQUEST_COUNT_ERROR = "Failed to update request count."

# Validation
INVALID_EMAIL = "Invalid email format."
PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters long."
NAME_REQUIRED = "Name is required."
AGE_INVALID = "Age must be a positive number."
BEHAVIOR_REQUIRED = "Behavior is required."
TEXT_AND_LANGUAGE_REQUIRED = "Text and language are required."
REQUEST_COUNT_INVALID = "Request count must be a non-negative integer."

# Success
USER_REGISTERED = "User registered successfully"
PROFILE_DELETED = "Profile deleted successfully."
REQUEST_COUNT_UPDATED = "Request count updated successfully."

# Warnings
FREE_LIMIT_EXCEEDED = (
    "You have exceeded {limit} free requests. "
    "Further usage may require additional permissions."
)
