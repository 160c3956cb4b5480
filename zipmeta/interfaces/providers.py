"""
Provider interfaces consumed by the metadata pipeline.

Defines the abstract capability contracts the pipeline and the facade depend
on, so that detection and each derivation step can be substituted and tested
independently with stub implementations.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from zipmeta.cancellation import CancellationToken
from zipmeta.models import (
    BuildInfo,
    CameraInfo,
    CategoryInfo,
    CompilerInfo,
    EncodingInfo,
    ProductInfo,
    SoftwareInfo,
    SourceInfo,
)


class IBinarySoftwareDetector(ABC):
    """Fingerprints raw boot file content."""

    @abstractmethod
    def get_software(
        self,
        buffer: bytes,
        token: Optional[CancellationToken] = None
    ) -> Optional[SoftwareInfo]:
        """
        Detect software metadata from a boot file buffer.

        Returns:
            Optional[SoftwareInfo]: Partially populated record, or None when
            the content is not recognized (implementations may instead raise
            DetectionError)
        """
        pass


class IProductMetaProvider(ABC):
    """Derives product identity from a package filename."""

    @abstractmethod
    def get_product(self, name: str, created: datetime) -> ProductInfo:
        """
        Derive product name, version and language.

        Args:
            name: Package filename
            created: Boot file timestamp in UTC
        """
        pass


class ICameraMetaProvider(ABC):
    """Derives camera platform and revision from a package filename."""

    @abstractmethod
    def get_camera(self, name: str) -> CameraInfo:
        pass


class ICategoryProvider(ABC):
    """Knows the product categories and assigns one to a record."""

    @abstractmethod
    def get_categories(self) -> List[CategoryInfo]:
        """
        List the configured categories.

        Returns:
            List[CategoryInfo]: Must contain exactly one category for a
            package provider
        """
        pass

    @abstractmethod
    def get_category(self, software: SoftwareInfo) -> CategoryInfo:
        pass


class ISourceMetaProvider(ABC):

    @abstractmethod
    def get_source(self, software: SoftwareInfo) -> SourceInfo:
        pass


class IBuildMetaProvider(ABC):

    @abstractmethod
    def get_build(self, software: SoftwareInfo) -> BuildInfo:
        pass


class ICompilerMetaProvider(ABC):

    @abstractmethod
    def get_compiler(self, software: SoftwareInfo) -> CompilerInfo:
        pass


class IEncodingMetaProvider(ABC):
    """Normalizes an encoding hint into a full encoding record."""

    @abstractmethod
    def get_encoding(self, encoding: Optional[EncodingInfo]) -> EncodingInfo:
        pass


class IBootFileNameResolver(ABC):
    """Resolves the boot filename used by a product category."""

    @abstractmethod
    def get_file_name(self, category_name: str) -> str:
        """
        Resolve the boot filename for a category.

        Returns:
            str: Literal filename matched case-insensitively against entries
        """
        pass
