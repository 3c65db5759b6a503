"""
Shared fixtures for the cloud-invoke unit tests.

Provides a small JSON-over-HTTP protocol (builder, signer, parser), a
recording transport, a service descriptor and a client factory wired to a
private metrics registry.
"""

import json
from collections.abc import Callable
from unittest.mock import Mock

import pytest
from prometheus_client import CollectorRegistry

from cloud_invoke.client import Client, create_client
from cloud_invoke.credentials import StaticCredentialsProvider
from cloud_invoke.observability.collector import UnifiedMetricsCollector
from cloud_invoke.registry import StrategyRegistry
from cloud_invoke.types import (
    Anomaly,
    Credentials,
    OperationShape,
    ServiceDescriptor,
    WireRequest,
    WireResponse,
    category_for_status,
)

# ============================================================================
# Strategies
# ============================================================================


def build_json(service, op_request):
    return WireRequest(
        method="POST",
        uri="/",
        headers={
            "content-type": "application/x-amz-json-1.0",
            "x-amz-target": f"{service.target_prefix}.{op_request.operation}",
        },
        body=json.dumps(dict(op_request.params)).encode(),
    )


def sign_fake(service, region, credentials, request):
    request.headers["authorization"] = (
        f"FAKE {credentials.access_key_id}/{region}/{service.effective_signing_name}"
    )
    return request


def parse_json(service, op_request, response):
    category = category_for_status(response.status)
    if category is not None:
        body = json.loads(response.body or b"{}")
        return Anomaly(
            category=category,
            message=body.get("message"),
            code=body.get("__type"),
        )
    return json.loads(response.body) if response.body else {}


# ============================================================================
# Transport
# ============================================================================


class RecordingTransport:
    """Transport that records submissions and answers via ``responder``."""

    def __init__(self, responder: Callable[[WireRequest], WireResponse]):
        self.responder = responder
        self.requests: list[WireRequest] = []

    def submit(self, request, sink):
        self.requests.append(request)
        sink(self.responder(request))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def service():
    """A JSON-protocol service with two operations."""
    return ServiceDescriptor(
        name="s3",
        protocol="json",
        signature_version="v4",
        endpoint_prefix="s3",
        target_prefix="S3_20060301",
        operations={
            "ListBuckets": OperationShape("ListBuckets", output_shape="ListBucketsOutput"),
            "GetObject": OperationShape("GetObject", input_shape="GetObjectRequest"),
        },
    )


@pytest.fixture
def registry():
    """A registry with the JSON test strategies registered for json/v4."""
    registry = StrategyRegistry()
    registry.register("json", "v4", build_json, sign_fake, parse_json)
    return registry


@pytest.fixture
def credentials():
    return Credentials("AKIDEXAMPLE", "secret")


@pytest.fixture
def credentials_provider(credentials):
    return StaticCredentialsProvider(credentials)


@pytest.fixture
def metrics():
    """A metrics collector publishing to a private Prometheus registry."""
    return UnifiedMetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def ok_response():
    return WireResponse(status=200, body=b'{"Buckets": []}')


@pytest.fixture
def transport(ok_response):
    return RecordingTransport(lambda request: ok_response)


@pytest.fixture
def make_client(service, registry, credentials_provider, transport, metrics):
    """Factory building a client; keyword arguments override the defaults."""

    def _make(**overrides) -> Client:
        kwargs = {
            "service": service,
            "credentials_provider": credentials_provider,
            "transport": transport,
            "region": "us-west-2",
            "registry": registry,
            "metrics": metrics,
        }
        kwargs.update(overrides)
        return create_client(**kwargs)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def mock_transport():
    """A transport mock that never answers."""
    transport = Mock()
    transport.submit = Mock()
    return transport
