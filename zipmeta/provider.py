"""
Software metadata provider for zip firmware packages.

Composes path expansion, recursive archive traversal and the metadata
pipeline behind a single entry point: given a package path or wildcard
pattern, produce one metadata record per embedded boot file.
"""

import logging
import os
from contextlib import closing
from typing import Any, Dict, Iterator, List, Optional

from .archive import ArchiveReader, ArchiveWalker, DEFAULT_NESTED_EXTENSION, expand_path, has_wildcards
from .cancellation import CancellationToken, ensure_token
from .config_manager import ConfigManager
from .enrichment import MetadataPipeline
from .interfaces.providers import (
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
from .models import BootExtraction, ProcessingFailure, SoftwareInfo
from .utils.exceptions import (
    ConfigurationError,
    DetectionError,
    MalformedArchiveError,
    NotFoundError,
    ProviderFailure,
)

ERROR_MODE_ISOLATE = "isolate"
ERROR_MODE_RAISE = "raise"


class SoftwareScan:
    """
    Lazy sequence of records for one path argument.

    Each iteration runs a fresh traversal; ``failures`` holds the path- and
    record-level failures isolated during the latest iteration.
    """

    def __init__(self, provider: "ZipSoftwareMetaProvider", path: str, token: Optional[CancellationToken] = None):
        self.provider = provider
        self.path = path
        self.token = token
        self.failures: List[ProcessingFailure] = []

    def __iter__(self) -> Iterator[SoftwareInfo]:
        self.failures = []
        return self.provider._scan(self.path, self.token, self.failures)


class ZipSoftwareMetaProvider:
    """
    Package-centric software metadata provider.

    Features:
    - Wildcard expansion of package paths
    - Depth-first traversal of nested zip archives
    - Two-branch metadata enrichment per boot file
    - Failures isolated to the smallest enclosing path or record
    """

    def __init__(
        self,
        software_detector: IBinarySoftwareDetector,
        category_provider: ICategoryProvider,
        boot_file_name_resolver: IBootFileNameResolver,
        product_provider: IProductMetaProvider,
        camera_provider: ICameraMetaProvider,
        source_provider: ISourceMetaProvider,
        build_provider: IBuildMetaProvider,
        compiler_provider: ICompilerMetaProvider,
        encoding_provider: IEncodingMetaProvider,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the provider.

        Args:
            config: Configuration dictionary; the packaged default if omitted

        Raises:
            ConfigurationError: If the category provider doesn't offer exactly
                one category, or no boot filename can be resolved
        """
        self.config = config if config is not None else ConfigManager().load_package_default_config()
        self.logger = logging.getLogger(__name__)

        categories = list(category_provider.get_categories() or [])
        if len(categories) != 1:
            raise ConfigurationError(f"Expected exactly one category, found {len(categories)}")
        self.category = categories[0]

        archive_config = self.config.get("archive") or {}
        self.file_name = archive_config.get("boot_file_name") or boot_file_name_resolver.get_file_name(self.category.name)
        if not self.file_name:
            raise ConfigurationError(f"No boot file name for category {self.category.name}")

        nested_extension = archive_config.get("nested_extension") or DEFAULT_NESTED_EXTENSION
        self.walker = ArchiveWalker(self.file_name, nested_extension)
        self.pipeline = MetadataPipeline(
            software_detector=software_detector,
            product_provider=product_provider,
            camera_provider=camera_provider,
            category_provider=category_provider,
            source_provider=source_provider,
            build_provider=build_provider,
            compiler_provider=compiler_provider,
            encoding_provider=encoding_provider,
            category=self.category,
        )

        self.error_mode = (self.config.get("errors") or {}).get("mode", ERROR_MODE_ISOLATE)
        self.stats = {"packages": 0, "extractions": 0, "failures": 0}

    @property
    def strict(self) -> bool:
        return self.error_mode == ERROR_MODE_RAISE

    def get_software(self, path: str, token: Optional[CancellationToken] = None) -> SoftwareScan:
        """
        Get software records for a package path.

        Args:
            path: Package path, optionally with ``?``/``*`` in the filename part
            token: Cancellation token threaded through the whole traversal

        Returns:
            SoftwareScan: Lazy, re-iterable sequence of SoftwareInfo records
        """
        return SoftwareScan(self, path, token)

    def _scan(self, path: str, token: Optional[CancellationToken], failures: List[ProcessingFailure]) -> Iterator[SoftwareInfo]:
        token = ensure_token(token)
        # A literal path is the whole request, so its failures propagate
        propagate = self.strict or not has_wildcards(path)
        for file_path in expand_path(path):
            token.raise_if_cancelled()
            yield from self._get_package_software(file_path, token, failures, propagate)

    def _get_package_software(
        self,
        path: str,
        token: CancellationToken,
        failures: List[ProcessingFailure],
        propagate: bool
    ) -> Iterator[SoftwareInfo]:
        name = os.path.basename(path)
        self.stats["packages"] += 1
        try:
            with ArchiveReader.open_file(path, name) as reader, \
                    closing(self.walker.walk(reader, name, token)) as extractions:
                for extraction in extractions:
                    self.stats["extractions"] += 1
                    software = self._get_record(path, extraction, token, failures)
                    if software is not None:
                        yield software
        except (NotFoundError, MalformedArchiveError) as e:
            if propagate:
                raise
            self.logger.error(f"Skipping package {path}: {e}")
            self.stats["failures"] += 1
            failures.append(ProcessingFailure(path=path, error=e, level="path"))

    def _get_record(
        self,
        path: str,
        extraction: BootExtraction,
        token: CancellationToken,
        failures: List[ProcessingFailure]
    ) -> Optional[SoftwareInfo]:
        try:
            return self.pipeline.get_software(extraction, token)
        except (DetectionError, ProviderFailure) as e:
            if self.strict:
                raise
            self.logger.error(f"Skipping {extraction.entry.name} in {extraction.archive_name}: {e}")
            self.stats["failures"] += 1
            failures.append(ProcessingFailure(
                path=path,
                error=e,
                archive_name=extraction.archive_name,
                entry_name=extraction.entry.name,
                level="record",
            ))
            return None

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about all scans run by this provider.

        Returns:
            Dictionary of traversal counters merged with pipeline counters
        """
        return {**self.stats, "pipeline": dict(self.pipeline.stats)}
