"""
Application constants.

Centralized constants for the reward vault.
"""

# ========================================================================
# CREDENTIAL ENCRYPTION
# ========================================================================

# AES-256-GCM layout: base64(IV || TAG || CIPHERTEXT)
ENCRYPTION_KEY_LENGTH = 32  # 256-bit key
ENCRYPTION_IV_LENGTH = 16  # 128-bit IV, fresh per call
ENCRYPTION_TAG_LENGTH = 16  # GCM authentication tag
ENCRYPTION_AAD = b"reward-credentials"  # Additional authenticated data

# scrypt parameters (N=2^14, r=8, p=1)
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1

DEFAULT_ENCRYPTION_SALT = "salt"
DEVELOPMENT_ENCRYPTION_SECRET = "default-secret-key-change-in-production"

# ========================================================================
# REWARD ACCOUNTS
# ========================================================================

MAX_SERVICE_NAME_LENGTH = 255
MAX_ACCOUNT_TYPE_LENGTH = 255
MAX_SUBSCRIPTION_DURATION_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MAX_CREDENTIALS_LENGTH = 1000
MAX_REASON_LENGTH = 500

# AVAILABLE accounts older than this are swept to EXPIRED
DEFAULT_REWARD_EXPIRY_DAYS = 365

# ========================================================================
# QUERIES
# ========================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORTABLE_FIELDS = (
    "id",
    "service_name",
    "category",
    "status",
    "created_at",
    "updated_at",
    "assigned_at",
)
DEFAULT_SORT_FIELD = "created_at"

DEFAULT_TREND_WINDOW_DAYS = 30
DEFAULT_AUDIT_HISTORY_LIMIT = 100

CREDENTIAL_ACCESS_WARNING = (
    "Credential access has been recorded in the audit trail. "
    "Do not share or store decrypted credentials outside the reward delivery flow."
)
