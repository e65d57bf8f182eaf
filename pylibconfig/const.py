"""
Package constants and fixed parser limits.
"""

# Application info
APP_NAME = "pylibconfig"
APP_VERSION = "0.1.0"

# Include handling
MAX_INCLUDE_DEPTH = 10
INCLUDE_SUFFIXES = (".cnf", ".cfg")

# Integer ranges
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
