"""
Metadata enrichment for extracted boot files.

The pipeline combines two sources of truth: metadata detected from the boot
file content, and metadata implied by the package filename and timestamp.
"""

from .pipeline import MetadataPipeline
from .validator import SoftwareValidator

__all__ = ["MetadataPipeline", "SoftwareValidator"]
