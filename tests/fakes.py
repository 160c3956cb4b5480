"""Stub providers and zip builders shared by the test suite."""

import io
import os
import struct
import zipfile
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple, Union

from zipmeta.interfaces.providers import (
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
from zipmeta.provider import ZipSoftwareMetaProvider

BOOT_FILE_NAME = "DISKBOOT.BIN"
ENTRY_DATE = (2017, 5, 1, 12, 30, 0)
ENTRY_CREATED_UTC = datetime(*ENTRY_DATE).astimezone(timezone.utc)

# Entry is (name, content); content None makes a directory marker
Entry = Tuple[str, Optional[bytes]]


def make_zip(entries: Sequence[Entry], date_time: Tuple[int, ...] = ENTRY_DATE) -> bytes:
    """Build a zip archive in memory, preserving entry order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            if content is None:
                info = zipfile.ZipInfo(name.rstrip("/") + "/", date_time=date_time)
                zf.writestr(info, b"")
            else:
                info = zipfile.ZipInfo(name, date_time=date_time)
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, content)
    return buffer.getvalue()


def patch_member_headers(data: bytes, flag_bits: int = 0, compress_type: Optional[int] = None) -> bytes:
    """Rewrite the flags and compression method in every local and central member header."""
    patched = bytearray(data)
    # (signature, offset of the general purpose flags); the method follows the flags
    for signature, flag_offset in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
        start = patched.find(signature)
        while start != -1:
            flags = struct.unpack_from("<H", patched, start + flag_offset)[0]
            struct.pack_into("<H", patched, start + flag_offset, flags | flag_bits)
            if compress_type is not None:
                struct.pack_into("<H", patched, start + flag_offset + 2, compress_type)
            start = patched.find(signature, start + 4)
    return bytes(patched)


def write_zip(path: Union[str, os.PathLike], entries: Sequence[Entry]) -> str:
    with open(path, "wb") as f:
        f.write(make_zip(entries))
    return str(path)


def camera_boot(platform="a480", revision="100b", product="chdk", version="1.4.1", language="en", category="PS") -> bytes:
    """Boot file content the stub detector recognizes with a camera."""
    return f"CAM:{platform}:{revision}:{product}:{version}:{language}:{category}".encode()


GENERIC_BOOT = b"GENERIC"
UNKNOWN_BOOT = b"\x00\x01garbage"


class StubDetector(IBinarySoftwareDetector):
    """Recognizes the CAM: and GENERIC boot contents built by the helpers above."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[bytes] = []

    def get_software(self, buffer, token=None):
        self.calls.append(buffer)
        if self.error is not None:
            raise self.error
        if buffer.startswith(b"CAM:"):
            _, platform, revision, product, version, language, category = buffer.decode().split(":")
            return SoftwareInfo(
                category=CategoryInfo(category),
                product=ProductInfo(product, version, language),
                camera=CameraInfo(platform, revision),
                encoding=EncodingInfo("dancingbits", 1),
            )
        if buffer == GENERIC_BOOT:
            return SoftwareInfo(encoding=EncodingInfo("plain"))
        return None


def _name_parts(name: str) -> List[str]:
    return os.path.splitext(name)[0].split("-")


class StubProductProvider(IProductMetaProvider):
    """Parses '<platform>-<revision>-<product>-<version>[-<language>].zip'."""

    def __init__(self):
        self.calls = []

    def get_product(self, name, created):
        self.calls.append((name, created))
        parts = _name_parts(name)
        if len(parts) < 4:
            raise ValueError(f"Cannot parse product from {name}")
        language = parts[4] if len(parts) > 4 else None
        return ProductInfo(parts[2], parts[3], language, created)


class StubCameraProvider(ICameraMetaProvider):

    def __init__(self):
        self.calls = []

    def get_camera(self, name):
        self.calls.append(name)
        parts = _name_parts(name)
        if len(parts) < 2:
            raise ValueError(f"Cannot parse camera from {name}")
        return CameraInfo(parts[0], parts[1])


class StubCategoryProvider(ICategoryProvider):

    def __init__(self, categories: Optional[List[CategoryInfo]] = None):
        self.categories = categories if categories is not None else [CategoryInfo("PS")]

    def get_categories(self):
        return self.categories

    def get_category(self, software):
        return CategoryInfo("PS")


class StubSourceProvider(ISourceMetaProvider):

    def get_source(self, software):
        # Requires the product to be known already
        return SourceInfo(software.product.name.upper(), "release")


class StubBuildProvider(IBuildMetaProvider):

    def get_build(self, software):
        return BuildInfo(name="full", status="final")


class StubCompilerProvider(ICompilerMetaProvider):

    def get_compiler(self, software):
        return CompilerInfo("gcc", "arm-none-eabi", "4.9.3")


class StubEncodingProvider(IEncodingMetaProvider):

    def __init__(self):
        self.hints = []

    def get_encoding(self, encoding):
        self.hints.append(encoding)
        if encoding is None:
            return EncodingInfo("plain")
        return EncodingInfo(encoding.name.lower(), encoding.data)


class StubBootFileNameResolver(IBootFileNameResolver):

    def __init__(self, file_name: str = BOOT_FILE_NAME):
        self.file_name = file_name

    def get_file_name(self, category_name):
        return self.file_name


def default_config(mode: str = "isolate") -> dict:
    return {
        "archive": {"nested_extension": ".zip", "boot_file_name": None},
        "errors": {"mode": mode},
    }


def stub_providers(**overrides) -> dict:
    providers = {
        "software_detector": StubDetector(),
        "category_provider": StubCategoryProvider(),
        "boot_file_name_resolver": StubBootFileNameResolver(),
        "product_provider": StubProductProvider(),
        "camera_provider": StubCameraProvider(),
        "source_provider": StubSourceProvider(),
        "build_provider": StubBuildProvider(),
        "compiler_provider": StubCompilerProvider(),
        "encoding_provider": StubEncodingProvider(),
    }
    providers.update(overrides)
    return providers


def build_provider(config: Optional[dict] = None, **overrides) -> ZipSoftwareMetaProvider:
    return ZipSoftwareMetaProvider(
        config=config if config is not None else default_config(),
        **stub_providers(**overrides),
    )
