"""Unit tests for core.suggestion_config and core.quantity modules.

# Test Coverage

The tests cover:
  - Quantity validation: valid strings, numbers, malformed values
  - SuggestionConfig: camelCase decoding, immutability
  - PersistentVolumeSpecOverride: inline volume source extraction

# Running Tests

Run with: pytest tests/unit/core/test_suggestion_config.py
"""

from decimal import Decimal

import pydantic
import pytest

from suggestion_composer.core.quantity import is_negative, to_quantity, validate_quantity
from suggestion_composer.core.suggestion_config import PersistentVolumeSpecOverride, SuggestionConfig

# =============================================================================
# Quantity Tests
# =============================================================================


class TestQuantity:
    """Test suite for quantity helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2m", Decimal("0.002")),
            ("3Mi", Decimal(3 * 1024**2)),
            ("4Gi", Decimal(4 * 1024**3)),
            ("500", Decimal(500)),
            (2, Decimal(2)),
        ],
    )
    def test_parses_valid_quantities(self, value, expected) -> None:
        assert to_quantity(value) == expected

    @pytest.mark.parametrize(
        "value", ["invalid", "", "4Zi", "Infinity", " 2m", "1_000m", "2\n", "2m ", True, None, [1]]
    )
    def test_rejects_invalid_quantities(self, value) -> None:
        with pytest.raises(ValueError):
            to_quantity(value)

    def test_validate_keeps_original_string(self) -> None:
        assert validate_quantity("1024Mi") == "1024Mi"

    def test_validate_renders_numbers(self) -> None:
        assert validate_quantity(5) == "5"

    def test_is_negative(self) -> None:
        assert is_negative("-1") is True
        assert is_negative("0") is False


# =============================================================================
# SuggestionConfig Tests
# =============================================================================


class TestSuggestionConfig:
    """Test suite for SuggestionConfig decoding."""

    def test_decodes_camel_case(self) -> None:
        """Test that the stored camelCase keys map onto typed fields.

        **Why this test is important:**
          - The config map format is shared with existing deployments
          - A missed alias would silently drop an override

        **What it tests:**
          - Top-level and nested override fields are decoded
        """
        config = SuggestionConfig.model_validate(
            {
                "image": "img",
                "imagePullPolicy": "Never",
                "serviceAccountName": "sa",
                "volumeMountPath": "/data",
                "persistentVolumeClaimSpec": {
                    "storageClassName": "fast",
                    "accessModes": ["ReadWriteMany"],
                    "volumeMode": "Block",
                    "resources": {"requests": {"storage": "2Gi"}},
                },
            }
        )

        assert config.image_pull_policy == "Never"
        assert config.service_account_name == "sa"
        assert config.volume_mount_path == "/data"
        claim = config.persistent_volume_claim_spec
        assert claim.storage_class_name == "fast"
        assert claim.access_modes == ["ReadWriteMany"]
        assert claim.volume_mode == "Block"
        assert claim.resources.requests == {"storage": "2Gi"}
        assert config.persistent_volume_spec is None

    def test_is_frozen(self) -> None:
        config = SuggestionConfig(image="img")

        with pytest.raises(pydantic.ValidationError):
            config.image = "other"


class TestPersistentVolumeSpecOverride:
    """Test suite for PersistentVolumeSpecOverride."""

    def test_volume_source_from_inline_key(self) -> None:
        override = PersistentVolumeSpecOverride.model_validate(
            {"csi": {"driver": "disk.csi.example.com", "volumeHandle": "vol-1"}, "volumeMode": "Filesystem"}
        )

        assert override.volume_source == {"csi": {"driver": "disk.csi.example.com", "volumeHandle": "vol-1"}}
        assert override.volume_mode == "Filesystem"

    def test_no_source(self) -> None:
        assert PersistentVolumeSpecOverride().volume_source == {}
