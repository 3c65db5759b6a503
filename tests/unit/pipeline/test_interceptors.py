"""Tests for InterceptorChain ordering and scoping."""

import pytest

from cloud_invoke.pipeline.interceptors import InterceptorChain
from cloud_invoke.types import OperationRequest, ServiceDescriptor, WireRequest


def tagging(tag):
    def interceptor(service, op_request, request):
        trail = request.headers.get("x-trail", "")
        return request.copy(headers={**request.headers, "x-trail": trail + tag})

    return interceptor


class TestInterceptorChain:
    def test_runs_in_registration_order(self, service):
        chain = InterceptorChain().add(tagging("a")).add(tagging("b")).add(tagging("c"))

        result = chain.apply(service, OperationRequest("ListBuckets"), WireRequest())

        assert result.headers["x-trail"] == "abc"
        assert len(chain) == 3

    def test_service_scope(self, service):
        other = ServiceDescriptor(name="dynamodb", protocol="json", signature_version="v4")
        chain = InterceptorChain().add(tagging("s3"), service="s3")

        op = OperationRequest("ListBuckets")
        assert chain.apply(service, op, WireRequest()).headers["x-trail"] == "s3"
        assert "x-trail" not in chain.apply(other, op, WireRequest()).headers

    def test_operation_scope(self, service):
        chain = InterceptorChain().add(tagging("put"), service="s3", operation="GetObject")

        hit = chain.apply(service, OperationRequest("GetObject"), WireRequest())
        miss = chain.apply(service, OperationRequest("ListBuckets"), WireRequest())

        assert hit.headers["x-trail"] == "put"
        assert "x-trail" not in miss.headers

    def test_empty_chain_returns_request_unchanged(self, service):
        request = WireRequest()
        assert InterceptorChain().apply(service, OperationRequest("X"), request) is request

    def test_interceptor_returning_none_raises(self, service):
        chain = InterceptorChain([lambda s, o, r: None])

        with pytest.raises(TypeError, match="expected WireRequest"):
            chain.apply(service, OperationRequest("ListBuckets"), WireRequest())

    def test_non_callable_rejected(self):
        with pytest.raises(ValueError, match="callable"):
            InterceptorChain().add("not callable")
