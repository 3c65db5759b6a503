"""Tests for send_request: exactly-once delivery and failure unification."""

import asyncio
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from cloud_invoke.exceptions import (
    ConfigurationError,
    CredentialsError,
    UnknownOperationError,
    UnsupportedStrategyError,
)
from cloud_invoke.observability.constants import (
    ANOMALIES_TOTAL,
    INFLIGHT_INVOCATIONS,
    INVOCATIONS_TOTAL,
    SETUP_FAULTS_TOTAL,
)
from cloud_invoke.pipeline.handle import ResultHandle
from cloud_invoke.pipeline.interceptors import InterceptorChain
from cloud_invoke.pipeline.send import send_request
from cloud_invoke.registry import StrategyRegistry
from cloud_invoke.transport import HttpxTransport
from cloud_invoke.types import (
    FAULT,
    INTERRUPTED,
    NOT_FOUND,
    UNAVAILABLE,
    Anomaly,
    OperationRequest,
    WireResponse,
    is_anomaly,
)


def _registry_with(registry, service, **replacements):
    """Copy the json/v4 strategies from ``registry`` with some replaced."""
    strategies = registry.resolve(service)
    fresh = StrategyRegistry()
    fresh.register(
        "json",
        "v4",
        replacements.get("builder", strategies.builder),
        replacements.get("signer", strategies.signer),
        replacements.get("parser", strategies.parser),
    )
    return fresh


class TestSuccessfulInvocation:
    @pytest.mark.asyncio
    async def test_decoded_output_delivered_exactly(self, client):
        """A 200 response decodes to exactly the output dict, no anomaly data."""
        handle = send_request(client, OperationRequest("ListBuckets"))

        result = await handle

        assert result == {"Buckets": []}
        assert not is_anomaly(result)
        assert "category" not in result

    @pytest.mark.asyncio
    async def test_returns_handle_synchronously(self, client):
        handle = send_request(client, OperationRequest("ListBuckets"))

        assert isinstance(handle, ResultHandle)
        await handle

    @pytest.mark.asyncio
    async def test_request_is_signed_and_submitted_once(self, client, transport):
        await send_request(client, OperationRequest("ListBuckets"))

        assert len(transport.requests) == 1
        submitted = transport.requests[0]
        assert submitted.headers["authorization"] == "FAKE AKIDEXAMPLE/us-west-2/s3"
        assert submitted.headers["x-amz-target"] == "S3_20060301.ListBuckets"
        assert submitted.host == "s3.us-west-2.amazonaws.com"

    @pytest.mark.asyncio
    async def test_diagnostics_attached_to_handle(self, client, ok_response):
        handle = send_request(client, OperationRequest("ListBuckets"))
        await handle

        assert handle.diagnostics.wire_request is not None
        assert "authorization" in handle.diagnostics.wire_request.headers
        assert handle.diagnostics.wire_response is ok_response

    @pytest.mark.asyncio
    async def test_operation_request_not_mutated(self, client):
        op = OperationRequest("GetObject", {"Bucket": "b", "Key": "k"})

        await send_request(client, op)

        assert op.params == {"Bucket": "b", "Key": "k"}

    @pytest.mark.asyncio
    async def test_success_metrics_recorded(self, client, metrics):
        await send_request(client, OperationRequest("ListBuckets"))

        labels = {"service": "s3", "operation": "ListBuckets", "outcome": "success"}
        assert metrics.get_counter(INVOCATIONS_TOTAL, labels) == 1

    @pytest.mark.asyncio
    async def test_concurrent_invocations_each_get_one_result(self, client, transport):
        handles = [
            send_request(client, OperationRequest("ListBuckets")) for _ in range(20)
        ]

        results = await asyncio.gather(*handles)

        assert results == [{"Buckets": []}] * 20
        assert len(transport.requests) == 20
        assert len({h.invocation_id for h in handles}) == 20


class TestSetupFaults:
    @pytest.mark.asyncio
    async def test_unresolvable_strategy_is_fault_without_submission(
        self, make_client, transport
    ):
        client = make_client(registry=StrategyRegistry())

        handle = send_request(client, OperationRequest("ListBuckets"))

        assert handle.done()
        result = await handle
        assert result.category == FAULT
        assert isinstance(result.cause, UnsupportedStrategyError)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_builder_error_is_fault_with_cause(
        self, make_client, registry, service, transport
    ):
        error = RuntimeError("cannot encode")
        client = make_client(
            registry=_registry_with(registry, service, builder=Mock(side_effect=error))
        )

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result == Anomaly(category=FAULT, cause=error, message="cannot encode")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_interceptor_error_is_fault_with_cause(self, make_client, transport):
        error = KeyError("missing")
        chain = InterceptorChain([Mock(side_effect=error)])
        client = make_client(interceptors=chain)

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result.category == FAULT
        assert result.cause is error
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_unknown_operation_is_fault(self, client, transport):
        result = await send_request(client, OperationRequest("DeleteEverything"))

        assert result.category == FAULT
        assert isinstance(result.cause, UnknownOperationError)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_credentials_failure_is_fault_and_nothing_submitted(
        self, make_client, transport
    ):
        provider = Mock()
        provider.fetch = AsyncMock(side_effect=OSError("metadata endpoint down"))
        client = make_client(credentials_provider=provider)

        handle = send_request(client, OperationRequest("ListBuckets"))
        result = await handle

        assert result.category == FAULT
        assert isinstance(result.cause, CredentialsError)
        assert isinstance(result.cause.__cause__, OSError)
        assert transport.requests == []
        assert handle.diagnostics.wire_request is None

    @pytest.mark.asyncio
    async def test_signer_error_is_fault(self, make_client, registry, service, transport):
        error = ValueError("bad key")
        client = make_client(
            registry=_registry_with(registry, service, signer=Mock(side_effect=error))
        )

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result.cause is error
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_transport_submit_error_is_fault(self, make_client, mock_transport):
        mock_transport.submit.side_effect = RuntimeError("pool exhausted")
        client = make_client(transport=mock_transport)

        handle = send_request(client, OperationRequest("ListBuckets"))
        result = await handle

        assert result.category == FAULT
        assert str(result.cause) == "pool exhausted"
        # The signed request was recorded before submission failed
        assert handle.diagnostics.wire_request is not None

    @pytest.mark.asyncio
    async def test_setup_fault_metrics_record_stage(self, make_client, metrics):
        client = make_client(registry=StrategyRegistry())

        await send_request(client, OperationRequest("ListBuckets"))

        assert metrics.get_counter(SETUP_FAULTS_TOTAL, {"service": "s3", "stage": "resolve"}) == 1

    def test_no_running_loop_delivers_fault(self, client, transport):
        handle = send_request(client, OperationRequest("ListBuckets"))

        result = handle.result(timeout=1)
        assert result.category == FAULT
        assert isinstance(result.cause, ConfigurationError)
        assert transport.requests == []


class TestResponseOutcomes:
    @pytest.mark.asyncio
    async def test_connection_refused_skips_parser(self, make_client, registry, service):
        parser = Mock()
        refused = ConnectionRefusedError("refused")
        transport = Mock()
        transport.submit = lambda request, sink: sink(
            WireResponse(anomaly_category=UNAVAILABLE, cause=refused)
        )
        client = make_client(
            transport=transport,
            registry=_registry_with(registry, service, parser=parser),
        )

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result.category == UNAVAILABLE
        assert result.cause is refused
        parser.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found_status_becomes_service_anomaly(self, make_client, metrics):
        transport = Mock()
        transport.submit = lambda request, sink: sink(
            WireResponse(status=404, body=b'{"__type": "NoSuchBucket", "message": "gone"}')
        )
        client = make_client(transport=transport)

        handle = send_request(client, OperationRequest("ListBuckets"))
        result = await handle

        assert result.category == NOT_FOUND
        assert result.code == "NoSuchBucket"
        assert handle.diagnostics.wire_response.status == 404
        labels = {"service": "s3", "operation": "ListBuckets", "category": NOT_FOUND}
        assert metrics.get_counter(ANOMALIES_TOTAL, labels) == 1

    @pytest.mark.asyncio
    async def test_malformed_body_is_fault(self, make_client):
        transport = Mock()
        transport.submit = lambda request, sink: sink(WireResponse(status=200, body=b"{not json"))
        client = make_client(transport=transport)

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result.category == FAULT
        assert result.cause is not None

    @pytest.mark.asyncio
    async def test_duplicate_sink_delivery_is_dropped(self, make_client):
        transport = Mock()

        def submit(request, sink):
            sink(WireResponse(status=200, body=b'{"first": true}'))
            sink(WireResponse(status=200, body=b'{"second": true}'))

        transport.submit = submit
        client = make_client(transport=transport)

        result = await send_request(client, OperationRequest("ListBuckets"))

        assert result == {"first": True}

    @pytest.mark.asyncio
    async def test_deferred_transport_delivery(self, make_client):
        """Transports may answer later from the event loop."""
        transport = Mock()

        def submit(request, sink):
            loop = asyncio.get_running_loop()
            loop.call_later(0.01, sink, WireResponse(status=200, body=b'{"late": 1}'))

        transport.submit = submit
        client = make_client(transport=transport)

        handle = send_request(client, OperationRequest("ListBuckets"))
        assert not handle.done()

        assert await handle == {"late": 1}


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_credentials_fetch_delivers_interrupted(self, make_client):
        started = asyncio.Event()

        async def fetch():
            started.set()
            await asyncio.sleep(60)

        provider = Mock()
        provider.fetch = fetch
        client = make_client(credentials_provider=provider)

        handle = send_request(client, OperationRequest("ListBuckets"))
        await started.wait()
        pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        result = await handle
        assert result.category == INTERRUPTED


class TestHttpxTransportDelivery:
    @pytest.mark.asyncio
    async def test_unencodable_header_still_resolves_handle(self, make_client, metrics):
        def add_note(service, op_request, request):
            return request.copy(headers={**request.headers, "x-amz-meta-note": "café €"})

        transport = HttpxTransport(
            client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(200))
            )
        )
        client = make_client(
            transport=transport, interceptors=InterceptorChain([add_note])
        )

        result = await send_request(client, OperationRequest("ListBuckets")).get(timeout=5)

        assert result.category == FAULT
        assert isinstance(result.cause, UnicodeError)
        inflight = metrics.get_metrics()["gauges"][INFLIGHT_INVOCATIONS]["service=s3"]
        assert inflight == 0
        await transport.aclose()
