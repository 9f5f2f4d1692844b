STORAGE_HOST = "storage.googleapis.com"
STORAGE_SCOPE_FULL_CONTROL = "https://www.googleapis.com/auth/devstorage.full_control"

# Non-final resumable chunks must be a multiple of this size.
MIN_UPLOAD_CHUNK_SIZE = 256 * 1024

NO_308_HEADER = "X-GUploader-No-308"
STATUS_OVERRIDE_HEADER = "X-HTTP-Status-Code-Override"
RESUME_INCOMPLETE_STATUS = "308"

# GCS may reply 499 to a DELETE on a session it did cancel.
CANCEL_SUCCESS_CODES = {200, 499}
OFFSET_SUCCESS_CODES = {200, 201}

DEFAULT_OBJECT_NAME = "x"
DEFAULT_OBJECT_SIZE = "4KB"
DEFAULT_CHUNK_SIZE = "256KB"
DEFAULT_REPEAT = 5
DEFAULT_CHUNK_COUNT = 2

MAX_LOGGED_URL_LENGTH = 80
