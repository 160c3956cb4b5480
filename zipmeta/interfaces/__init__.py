"""Capability interfaces for detection and metadata derivation."""

from .providers import (
    IBinarySoftwareDetector,
    IBootFileNameResolver,
    IBuildMetaProvider,
    ICameraMetaProvider,
    ICategoryProvider,
    ICompilerMetaProvider,
    IEncodingMetaProvider,
    IProductMetaProvider,
    ISourceMetaProvider,
)

__all__ = [
    "IBinarySoftwareDetector",
    "IBootFileNameResolver",
    "IBuildMetaProvider",
    "ICameraMetaProvider",
    "ICategoryProvider",
    "ICompilerMetaProvider",
    "IEncodingMetaProvider",
    "IProductMetaProvider",
    "ISourceMetaProvider",
]
