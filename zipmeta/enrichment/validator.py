"""Cross-validation of binary-derived metadata against filename conventions."""

from typing import Any, List, Optional

from ..models import CameraInfo, CategoryInfo, ProductInfo, SoftwareInfo, ValidationMismatch


class SoftwareValidator:
    """
    Compares a detected record with the metadata its package name implies.

    Mismatches are diagnostics only: the detected record is never modified.
    """

    FIELDS = [
        ("category name", "category", "name"),
        ("product name", "product", "name"),
        ("product version", "product", "version"),
        ("product language", "product", "language"),
        ("platform", "camera", "platform"),
        ("revision", "camera", "revision"),
    ]

    def validate(
        self,
        software: SoftwareInfo,
        product: ProductInfo,
        camera: CameraInfo,
        category: Optional[CategoryInfo] = None,
    ) -> List[ValidationMismatch]:
        """
        Compare detected values with expected values field by field.

        Args:
            software: Record produced by the binary detector
            product: Product derived from the package filename and timestamp
            camera: Camera derived from the package filename
            category: Configured category, if category should be checked

        Returns:
            List of mismatches, in field order (empty if consistent)
        """
        expected = {"category": category, "product": product, "camera": camera}
        mismatches = []
        for label, section, attribute in self.FIELDS:
            if section == "category" and category is None:
                continue
            expected_value = _get(expected[section], attribute)
            actual_value = _get(getattr(software, section), attribute)
            if expected_value != actual_value:
                mismatches.append(ValidationMismatch(label, expected_value, actual_value))
        return mismatches


def _get(obj: Any, attribute: str) -> Any:
    return getattr(obj, attribute, None) if obj is not None else None
