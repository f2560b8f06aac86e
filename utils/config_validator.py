"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from decimal import Decimal
from typing import Optional
from urllib.parse import urlparse


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_shop_api_url(url: Optional[str]) -> None:
    """
    Validate the order/catalog service base URL.

    Raises:
        ConfigValidationError: If the URL is missing or not http(s)
    """
    if not url or len(url.strip()) == 0:
        raise ConfigValidationError(
            "SHOP_API_URL is required but not set!\n"
            "Add to .env: SHOP_API_URL=https://api.example.com/api"
        )

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"SHOP_API_URL must be an http(s) URL (currently: {url})\n"
            "Example: SHOP_API_URL=https://api.example.com/api"
        )


def validate_tax_rate(tax_rate: Decimal) -> None:
    """
    Validate the tax rate applied to the cart subtotal.

    Raises:
        ConfigValidationError: If the rate is outside [0, 1]
    """
    if tax_rate < 0 or tax_rate > 1:
        raise ConfigValidationError(
            f"TAX_RATE must be a fraction between 0 and 1 (currently: {tax_rate})\n"
            "Example: TAX_RATE=0.15 for 15% tax"
        )


def validate_shipping_config(threshold: Decimal, fee: Decimal) -> None:
    """
    Validate free-shipping threshold and flat shipping fee.

    Raises:
        ConfigValidationError: If either value is negative
    """
    if threshold < 0:
        raise ConfigValidationError(
            f"FREE_SHIPPING_THRESHOLD must not be negative (currently: {threshold})"
        )
    if fee < 0:
        raise ConfigValidationError(
            f"FLAT_SHIPPING_FEE must not be negative (currently: {fee})"
        )


def validate_required_config(value: Optional[str], name: str, example: str = "") -> None:
    """
    Validate that a required config value is set.

    Args:
        value: The config value to check
        name: Name of the config variable
        example: Optional example value to show in error message

    Raises:
        ConfigValidationError: If value is missing
    """
    if not value:
        error_msg = f"{name} is required but not set!"
        if example:
            error_msg += f"\nAdd to .env: {name}={example}"
        raise ConfigValidationError(error_msg)


def validate_startup_config(config_module) -> None:
    """
    Validate all critical configuration at startup.

    Args:
        config_module: The config module to validate

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_shop_api_url(getattr(config_module, 'SHOP_API_URL', None))
    validate_tax_rate(config_module.TAX_RATE)
    validate_shipping_config(config_module.FREE_SHIPPING_THRESHOLD, config_module.FLAT_SHIPPING_FEE)
    validate_required_config(getattr(config_module, 'DB_URL', None), 'DB_URL', 'sqlite:///data/petshop.db')
    validate_required_config(getattr(config_module, 'CART_STORAGE_KEY', None), 'CART_STORAGE_KEY', 'cart')


def validate_or_exit(config_module) -> None:
    """
    Validate configuration and exit with error code 1 if validation fails.

    This is the main entry point for startup validation.
    """
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nStartup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
