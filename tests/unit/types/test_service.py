"""Tests for service descriptors and operation requests."""

import pytest

from cloud_invoke.exceptions import UnknownOperationError
from cloud_invoke.types import OperationRequest, OperationShape, ServiceDescriptor


class TestServiceDescriptor:
    def test_get_operation(self, service):
        assert service.get_operation("GetObject").input_shape == "GetObjectRequest"
        assert service.has_operation("ListBuckets")
        assert not service.has_operation("PutObject")

    def test_unknown_operation(self, service):
        with pytest.raises(UnknownOperationError) as exc_info:
            service.get_operation("PutObject")
        assert exc_info.value.service == "s3"

    def test_operations_read_only(self, service):
        with pytest.raises(TypeError):
            service.operations["PutObject"] = OperationShape("PutObject")  # type: ignore[index]

    def test_effective_signing_name(self):
        base = {"protocol": "json", "signature_version": "v4"}
        assert ServiceDescriptor(name="a", **base).effective_signing_name == "a"
        assert (
            ServiceDescriptor(name="a", endpoint_prefix="b", **base).effective_signing_name
            == "b"
        )
        assert (
            ServiceDescriptor(
                name="a", endpoint_prefix="b", signing_name="c", **base
            ).effective_signing_name
            == "c"
        )

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            ServiceDescriptor(name="", protocol="json", signature_version="v4")


class TestOperationRequest:
    def test_params_are_read_only_copy(self):
        params = {"Bucket": "b"}
        request = OperationRequest("GetObject", params)
        params["Bucket"] = "changed"

        assert request.params == {"Bucket": "b"}
        with pytest.raises(TypeError):
            request.params["Key"] = "k"  # type: ignore[index]

    def test_empty_operation_rejected(self):
        with pytest.raises(ValueError):
            OperationRequest("")
