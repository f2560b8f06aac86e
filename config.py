import os
import sys
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)


def _abort(name: str, reason: str, expected: str) -> None:
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


def _decimal_env(name: str, default: str) -> Decimal:
    raw = os.environ.get(name, default)
    try:
        value = Decimal(raw)
    except InvalidOperation:
        _abort(name, f"'{raw}' is not a number", "Non-negative decimal (e.g. 0.15, 100, 10)")
    if value < 0:
        _abort(name, f"{name} must not be negative (got: {value})", "Non-negative decimal")
    return value


def _int_env(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        value = int(raw)
    except ValueError:
        _abort(name, f"'{raw}' is not an integer", "Positive integer")
    if value <= 0:
        _abort(name, f"{name} must be positive (got: {value})", "Positive integer")
    return value


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    _abort("RUNTIME_ENVIRONMENT", str(e), ", ".join(valid_values))

# Shop backend (orders, catalog)
SHOP_API_URL = os.environ.get("SHOP_API_URL", "http://localhost:5000/api").rstrip("/")
SHOP_API_TIMEOUT_SECONDS = _int_env("SHOP_API_TIMEOUT_SECONDS", "30")

# Pricing
CURRENCY = os.environ.get("CURRENCY", "PKR")
TAX_RATE = _decimal_env("TAX_RATE", "0.15")
FREE_SHIPPING_THRESHOLD = _decimal_env("FREE_SHIPPING_THRESHOLD", "100")
FLAT_SHIPPING_FEE = _decimal_env("FLAT_SHIPPING_FEE", "10")

# Products listed without a stock figure are capped at this quantity
DEFAULT_AVAILABLE_STOCK = _int_env("DEFAULT_AVAILABLE_STOCK", "999")

# Checkout defaults
DEFAULT_COUNTRY = os.environ.get("DEFAULT_COUNTRY", "Pakistan")

# Client-side durable storage
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
DB_URL = os.environ.get("DB_URL", "sqlite:///data/petshop.db")

LANGUAGE = os.environ.get("LANGUAGE", "en")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_RETENTION_DAYS = _int_env("LOG_RETENTION_DAYS", "7")
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"
