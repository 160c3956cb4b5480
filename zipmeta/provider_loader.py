"""
Provider wiring from configuration.

Provider implementations live outside this package; configuration names
them as ``module:attribute`` references to classes or factory functions that
take no arguments.
"""

import importlib
import logging
from typing import Any, Dict, Optional

from .config_validator import PROVIDER_ROLES
from .provider import ZipSoftwareMetaProvider
from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_object(reference: str) -> Any:
    """Import the attribute a 'module:attribute' reference points at."""
    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import provider module '{module_name}'", original_exception=e
        ) from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(
            f"Module '{module_name}' has no attribute '{attribute}'", original_exception=e
        ) from e


def load_providers(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Instantiate every configured provider.

    Args:
        config: Configuration with a 'providers' section

    Returns:
        Mapping of provider role to provider instance

    Raises:
        ConfigurationError: If a role is missing or cannot be instantiated
    """
    references = config.get("providers") or {}
    providers = {}
    for role in PROVIDER_ROLES:
        reference = references.get(role)
        if not reference:
            raise ConfigurationError(
                f"Missing provider '{role}'",
                suggested_action=f"Set providers.{role} to 'module:attribute' in the config file",
            )
        factory = load_object(reference)
        try:
            providers[role] = factory()
        except Exception as e:
            raise ConfigurationError(f"Cannot create provider '{role}'", original_exception=e) from e
        logger.debug(f"Loaded {role} from {reference}")
    return providers


def create_provider(config: Dict[str, Any], providers: Optional[Dict[str, Any]] = None) -> ZipSoftwareMetaProvider:
    """Build a ZipSoftwareMetaProvider from configuration."""
    if providers is None:
        providers = load_providers(config)
    return ZipSoftwareMetaProvider(config=config, **providers)
