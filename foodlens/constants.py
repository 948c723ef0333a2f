"""All magic values live here — no inline literals anywhere else."""

# Providers
PROVIDER_GEMINI = "gemini"
PROVIDER_CLAUDE = "claude"
PROVIDER_OPENAI = "openai"
PROVIDERS = (PROVIDER_GEMINI, PROVIDER_CLAUDE, PROVIDER_OPENAI)
DEFAULT_PROVIDER = PROVIDER_GEMINI

# Model identifiers
GEMINI_VISION_MODEL = "gemini-2.5-flash"
CLAUDE_VISION_MODEL = "claude-opus-4-6"
OPENAI_VISION_MODEL = "gpt-4o"
CLAUDE_MAX_TOKENS = 4096

# Sampling temperature: low, biased toward factual output.
ANALYSIS_TEMPERATURE: float = 0.4

# Image normalization
MAX_IMAGE_DIMENSION = 1024
JPEG_QUALITY = 80
JPEG_MEDIA_TYPE = "image/jpeg"
JPEG_FORMAT = "JPEG"
IMAGE_MEDIA_PREFIX = "image/"
FLATTEN_BACKGROUND = (255, 255, 255)

# Analysis contract
SCHEMA_VERSION = "2"
SCHEMA_NAME = "food_analysis"
ALTERNATIVES_SCORE_THRESHOLD = 60
DEFAULT_OUTPUT_LANGUAGE = "Turkish"
VERDICTS = ("Excellent", "Good", "Average", "Poor", "Bad")
RISK_LEVELS = ("Safe", "Moderate", "High")

# Retry policy: attempts in total (initial call included) and linear backoff step.
MAX_ATTEMPTS = 3
BACKOFF_STEP_SECONDS: float = 2.0

# Per-attempt deadline (seconds). 0 disables it.
REQUEST_TIMEOUT_SECONDS: float = 60.0

# HTTP status codes classified at the transport boundary
OVERLOADED_STATUS_CODES = frozenset({503, 529})
AUTH_STATUS_CODES = frozenset({401, 403})
QUOTA_STATUS_CODES = frozenset({429})
BAD_REQUEST_STATUS_CODES = frozenset({400, 404, 413, 422})
GEMINI_OVERLOADED_STATUS = "UNAVAILABLE"
GEMINI_QUOTA_STATUS = "RESOURCE_EXHAUSTED"

# Remote error categories
CATEGORY_AUTH = "auth"
CATEGORY_QUOTA = "quota"
CATEGORY_BAD_REQUEST = "bad_request"
CATEGORY_UNKNOWN = "unknown"

# Log messages
MSG_ANALYSIS_START = "Analyzing %s image (%dx%d) via %s"
MSG_ANALYSIS_DONE = "✓ Analysis complete: %s — score %d (%.1fs)"
MSG_OVERLOADED_RETRY = "Model overloaded (attempt %d/%d) — retrying in %.0fs"
MSG_SATURATED = "✗ Model still unavailable after %d attempts"
MSG_VALIDATION_FAILED = "✗ Response failed validation: %s"
MSG_ATTEMPT_TIMEOUT = "Attempt exceeded %.0fs deadline"
MSG_SOFT_ALTERNATIVES = "Score %d >= %d but %d alternatives returned"
MSG_NORMALIZED = "Normalized image %dx%d → %dx%d (%d bytes)"
MSG_SCANNER_STARTING = "Starting FoodLens scan…"
MSG_SCAN_STAMPED = "Scan %s stamped at %d"

# Error messages
MSG_ERR_MISSING_KEY = "%s must be set in .env to use the %s provider"
MSG_ERR_UNSUPPORTED_MEDIA = "Unsupported file type: %s (an image is required)"
MSG_ERR_EMPTY_FILE = "Image file is empty"
MSG_ERR_DECODE = "File could not be decoded as an image"
MSG_ERR_RENDER = "Image could not be re-encoded"
MSG_ERR_EMPTY_RESPONSE = "No response from model"
MSG_ERR_NOT_JSON = "Response is not valid JSON"
MSG_ERR_NOT_OBJECT = "Response JSON is not an object"
MSG_ERR_SATURATED = "Model unavailable after %d attempts"
MSG_ERR_TIMEOUT = "Model did not answer within %.0fs"
MSG_ERR_UNKNOWN_PROVIDER = "Unknown provider: %s (expected one of %s)"

# User-facing messages, one per error category
MSG_USER_CONFIG = "The analysis service is not configured — set an API key and restart."
MSG_USER_INPUT = "Please choose a valid image file (JPEG, PNG, WebP…)."
MSG_USER_SATURATED = "The service is very busy right now. Please try again in a moment."
MSG_USER_TRANSIENT = "The service is temporarily unavailable. Please try again."
MSG_USER_VALIDATION = "The label could not be analyzed. Try a clearer photo."
MSG_USER_AUTH = "The API key was rejected — check your credentials."
MSG_USER_QUOTA = "The usage quota has been exceeded. Please try again later."
MSG_USER_REMOTE = "The analysis service rejected the request."
MSG_USER_UNKNOWN = "Something went wrong while analyzing the image."

MSG_USAGE = "Usage: foodlens <image-path>"
MSG_ERR_READ_FILE = "Cannot read %s: %s"
MSG_ERR_BAD_CONFIG = "Invalid configuration: %s"
