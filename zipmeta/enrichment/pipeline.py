"""
Metadata pipeline turning an extracted boot file into a complete record.

Processing order:
- Binary detection of the boot file content
- Branch A (camera detected): cross-validation, then shared enrichment
- Branch B (camera unknown): product from the package name, shared
  enrichment, then camera from the package name
- Shared enrichment: category → source → build → compiler → encoding
"""

import logging
from typing import Dict, List, Optional

from ..cancellation import CancellationToken, ensure_token
from ..interfaces.providers import (
    IBinarySoftwareDetector,
    IBuildMetaProvider,
    ICameraMetaProvider,
    ICategoryProvider,
    ICompilerMetaProvider,
    IEncodingMetaProvider,
    IProductMetaProvider,
    ISourceMetaProvider,
)
from ..models import (
    BootExtraction,
    BuildInfo,
    CameraInfo,
    CategoryInfo,
    CompilerInfo,
    EncodingInfo,
    ProductInfo,
    SoftwareInfo,
    SourceInfo,
    ValidationMismatch,
)
from ..utils.exceptions import DetectionError, OperationCancelledError
from ..utils.provider_error_handler import handle_provider_errors
from .validator import SoftwareValidator


class MetadataPipeline:
    """
    Two-branch enrichment of detected software metadata.

    Features:
    - Binary-derived metadata is authoritative; filename-derived metadata
      only fills gaps or is compared against
    - Provider failures abort the current record only
    - Cancellation is checked before every provider call
    """

    def __init__(
        self,
        software_detector: IBinarySoftwareDetector,
        product_provider: IProductMetaProvider,
        camera_provider: ICameraMetaProvider,
        category_provider: ICategoryProvider,
        source_provider: ISourceMetaProvider,
        build_provider: IBuildMetaProvider,
        compiler_provider: ICompilerMetaProvider,
        encoding_provider: IEncodingMetaProvider,
        category: Optional[CategoryInfo] = None,
        validator: Optional[SoftwareValidator] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            category: Configured category, checked against detected records
            validator: Cross-validator; a default SoftwareValidator if omitted
        """
        self.software_detector = software_detector
        self.product_provider = product_provider
        self.camera_provider = camera_provider
        self.category_provider = category_provider
        self.source_provider = source_provider
        self.build_provider = build_provider
        self.compiler_provider = compiler_provider
        self.encoding_provider = encoding_provider
        self.category = category
        self.validator = validator or SoftwareValidator()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.stats: Dict[str, int] = {
            "records": 0,
            "detected_camera": 0,
            "derived_camera": 0,
            "mismatches": 0,
            "detection_errors": 0,
            "provider_errors": 0,
        }

    def get_software(
        self,
        extraction: BootExtraction,
        token: Optional[CancellationToken] = None
    ) -> SoftwareInfo:
        """
        Produce a fully populated record for one boot file.

        Args:
            extraction: Boot file content with its archive context
            token: Cancellation token

        Returns:
            SoftwareInfo with every field set

        Raises:
            DetectionError: If the detector cannot classify the content
            ProviderFailure: If any provider rejects its input
            OperationCancelledError: If the token is cancelled
        """
        token = ensure_token(token)
        software = self._detect(extraction, token)

        if software.camera is not None:
            self.stats["detected_camera"] += 1
            self.validate(extraction, software, token)
            self._enrich(extraction, software, token)
        else:
            self.stats["derived_camera"] += 1
            software.product = self._get_product(extraction, token)
            self._enrich(extraction, software, token)
            software.camera = self._get_camera(extraction, token)

        self.stats["records"] += 1
        return software

    def validate(
        self,
        extraction: BootExtraction,
        software: SoftwareInfo,
        token: Optional[CancellationToken] = None
    ) -> List[ValidationMismatch]:
        """
        Compare a detected record with its package filename conventions.

        Each mismatch is logged as a warning; the record is left unchanged.

        Returns:
            List of mismatches found
        """
        token = ensure_token(token)
        product = self._get_product(extraction, token)
        camera = self._get_camera(extraction, token)
        category = self.category if software.category is not None else None

        mismatches = self.validator.validate(software, product, camera, category)
        for mismatch in mismatches:
            self.logger.warning(f"Mismatching {mismatch.field}: {mismatch.actual}")
        self.stats["mismatches"] += len(mismatches)
        return mismatches

    def _detect(self, extraction: BootExtraction, token: CancellationToken) -> SoftwareInfo:
        token.raise_if_cancelled()
        archive_name = extraction.archive_name
        entry_name = extraction.entry.name
        try:
            software = self.software_detector.get_software(extraction.data, token)
        except OperationCancelledError:
            raise
        except Exception as e:
            self.stats["detection_errors"] += 1
            self.logger.error(f"Cannot detect software in {archive_name}: {e}")
            raise DetectionError(
                "Cannot detect software", path=archive_name, entry=entry_name, original_exception=e
            ) from e

        if software is None:
            self.stats["detection_errors"] += 1
            self.logger.error(f"Cannot detect software in {archive_name}")
            raise DetectionError("Cannot detect software", path=archive_name, entry=entry_name)
        return software

    def _enrich(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> None:
        # Each step sees the record as left by the previous one
        software.category = self._get_category(extraction, software, token)
        software.source = self._get_source(extraction, software, token)
        software.build = self._get_build(extraction, software, token)
        software.compiler = self._get_compiler(extraction, software, token)
        software.encoding = self._get_encoding(extraction, software, token)

    @handle_provider_errors(provider="product")
    def _get_product(self, extraction: BootExtraction, token: CancellationToken) -> ProductInfo:
        token.raise_if_cancelled()
        return self.product_provider.get_product(extraction.archive_name, extraction.entry.created_utc)

    @handle_provider_errors(provider="camera")
    def _get_camera(self, extraction: BootExtraction, token: CancellationToken) -> CameraInfo:
        token.raise_if_cancelled()
        return self.camera_provider.get_camera(extraction.archive_name)

    @handle_provider_errors(provider="category")
    def _get_category(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> CategoryInfo:
        token.raise_if_cancelled()
        return self.category_provider.get_category(software)

    @handle_provider_errors(provider="source")
    def _get_source(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> SourceInfo:
        token.raise_if_cancelled()
        return self.source_provider.get_source(software)

    @handle_provider_errors(provider="build")
    def _get_build(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> BuildInfo:
        token.raise_if_cancelled()
        return self.build_provider.get_build(software)

    @handle_provider_errors(provider="compiler")
    def _get_compiler(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> CompilerInfo:
        token.raise_if_cancelled()
        return self.compiler_provider.get_compiler(software)

    @handle_provider_errors(provider="encoding")
    def _get_encoding(self, extraction: BootExtraction, software: SoftwareInfo, token: CancellationToken) -> EncodingInfo:
        token.raise_if_cancelled()
        return self.encoding_provider.get_encoding(software.encoding)
