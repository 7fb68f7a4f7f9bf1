"""Unit tests for clients.config_store module.

This file tests the config stores that serve raw suggestion configuration.

# Test Coverage

The tests cover:
  - StaticConfigStore: present and absent keys
  - ConfigMapStore: data lookup, missing data, 404 handling, API failures,
    cluster config loading

# Test Structure

Tests use pytest class-based organization. The Kubernetes CoreV1Api is
replaced with a MagicMock so no cluster is required.

# Running Tests

Run with: pytest tests/unit/clients/test_config_store.py
"""

from unittest.mock import MagicMock, patch

import pytest
from kubernetes import client
from kubernetes.client.rest import ApiException

from suggestion_composer.clients.config_store import ConfigMapStore, StaticConfigStore
from suggestion_composer.core.exceptions import UpstreamError


@pytest.fixture
def mock_core_api() -> MagicMock:
    """Create a mock CoreV1Api returning a config map with a suggestion key."""
    api = MagicMock(spec=client.CoreV1Api)
    api.read_namespaced_config_map.return_value = client.V1ConfigMap(
        data={"suggestion": '{"random": {"image": "test-image"}}'}
    )
    return api


# =============================================================================
# StaticConfigStore Tests
# =============================================================================


class TestStaticConfigStore:
    """Test suite for StaticConfigStore."""

    def test_returns_stored_value(self) -> None:
        assert StaticConfigStore({"suggestion": "{}"}).get("suggestion") == "{}"

    def test_missing_key_returns_none(self) -> None:
        assert StaticConfigStore().get("suggestion") is None

    def test_copies_input(self) -> None:
        data = {"suggestion": "{}"}
        store = StaticConfigStore(data)

        data["suggestion"] = "changed"

        assert store.get("suggestion") == "{}"


# =============================================================================
# ConfigMapStore Tests
# =============================================================================


class TestConfigMapStore:
    """Test suite for ConfigMapStore."""

    def test_reads_key_from_config_map(self, mock_core_api: MagicMock) -> None:
        """Test that get() reads the named config map and returns the key.

        **Why this test is important:**
          - This is how the composer reads algorithm settings in a cluster
          - The name and namespace must be passed through unchanged

        **What it tests:**
          - read_namespaced_config_map is called with name and namespace
          - The key's value is returned verbatim
        """
        store = ConfigMapStore(name="katib-config", namespace="kubeflow", api=mock_core_api)

        raw = store.get("suggestion")

        assert raw == '{"random": {"image": "test-image"}}'
        mock_core_api.read_namespaced_config_map.assert_called_once_with(
            name="katib-config", namespace="kubeflow"
        )

    def test_missing_key_returns_none(self, mock_core_api: MagicMock) -> None:
        store = ConfigMapStore(name="katib-config", namespace="kubeflow", api=mock_core_api)

        assert store.get("early-stopping") is None

    def test_config_map_without_data(self, mock_core_api: MagicMock) -> None:
        mock_core_api.read_namespaced_config_map.return_value = client.V1ConfigMap(data=None)
        store = ConfigMapStore(name="katib-config", namespace="kubeflow", api=mock_core_api)

        assert store.get("suggestion") is None

    def test_not_found_returns_none(self, mock_core_api: MagicMock) -> None:
        """Test that a missing config map reads as missing config, not an error.

        **Why this test is important:**
          - The resolver turns a missing entry into ConfigNotFoundError
          - Transport errors and absence must stay distinguishable

        **What it tests:**
          - ApiException with status 404 yields None
        """
        mock_core_api.read_namespaced_config_map.side_effect = ApiException(status=404, reason="Not Found")
        store = ConfigMapStore(name="katib-config", namespace="kubeflow", api=mock_core_api)

        assert store.get("suggestion") is None

    def test_api_error_raises_upstream_error(self, mock_core_api: MagicMock) -> None:
        mock_core_api.read_namespaced_config_map.side_effect = ApiException(status=500, reason="Internal")
        store = ConfigMapStore(name="katib-config", namespace="kubeflow", api=mock_core_api)

        with pytest.raises(UpstreamError, match="kubeflow/katib-config"):
            store.get("suggestion")

    @patch("suggestion_composer.clients.config_store.client.CoreV1Api")
    @patch("suggestion_composer.clients.config_store.config.load_kube_config")
    @patch("suggestion_composer.clients.config_store.config.load_incluster_config")
    def test_falls_back_to_kubeconfig(
        self,
        mock_incluster: MagicMock,
        mock_kubeconfig: MagicMock,
        mock_api_class: MagicMock,
    ) -> None:
        """Test that kubeconfig is loaded when not running in a cluster."""
        from kubernetes import config as k8s_config

        mock_incluster.side_effect = k8s_config.ConfigException("not in cluster")

        store = ConfigMapStore(name="katib-config", namespace="kubeflow")

        mock_kubeconfig.assert_called_once_with()
        assert store.api is mock_api_class.return_value
