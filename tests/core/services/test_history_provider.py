from __future__ import annotations

from decimal import Decimal

import httpx
import pytest
from support import ScriptedTransport, chart_payload, json_response, make_request

from indexfeed.core.config import HistoryConfig, IndexFeedConfig, ProviderConfig
from indexfeed.core.data import YahooIndexPriceClient
from indexfeed.core.exceptions import DataIntegrityError
from indexfeed.core.models import HistoryRequest, RawPriceSeries, SecurityType
from indexfeed.core.services import IndexHistoryProvider, SliceAggregator

# 2024-03-04 and 2024-03-05, 09:30 America/New_York
MARCH_4 = 1709562600
MARCH_5 = 1709649000


def _series(timestamps: list[int], closes: list[float]) -> RawPriceSeries:
    return RawPriceSeries(
        timestamps=timestamps,
        open=closes,
        high=closes,
        low=closes,
        close=closes,
        volume=[0.0] * len(timestamps),
    )


class StubClient:
    def __init__(self, series: dict[str, RawPriceSeries | None]) -> None:
        self.series = series
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, request: HistoryRequest) -> RawPriceSeries | None:
        self.calls.append(request.symbol)
        return self.series.get(request.symbol)

    def close(self) -> None:
        self.closed = True


class RecordingAggregatorFactory:
    def __init__(self) -> None:
        self.created: list[SliceAggregator] = []

    def __call__(self, slice_time_zone: object) -> SliceAggregator:
        aggregator = SliceAggregator(slice_time_zone)
        self.created.append(aggregator)
        return aggregator


@pytest.fixture
def stub_client() -> StubClient:
    return StubClient(
        {
            "SPX": _series([MARCH_4, MARCH_5], [5130.95, 5078.65]),
            "NDX": _series([MARCH_5], [17970.1]),
            "DOWN": None,
        }
    )


def test_mixed_batch_subscribes_only_successful_requests(stub_client: StubClient) -> None:
    factory = RecordingAggregatorFactory()
    provider = IndexHistoryProvider(stub_client, aggregator_factory=factory)
    requests = [
        make_request("AAPL", security_type=SecurityType.EQUITY),
        make_request("DOWN"),
        make_request("SPX"),
    ]

    slices = provider.get_history(requests)

    assert slices is not None
    assert stub_client.calls == ["DOWN", "SPX"]
    assert [request.symbol for request in factory.created[0].requests] == ["SPX"]
    closes = [item["SPX"].close for item in slices]
    assert closes == [Decimal("5130.95"), Decimal("5078.65")]


def test_returns_none_when_nothing_produced_data(log_messages: list[dict[str, object]]) -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        if "DOWN" in request.url.path:
            return httpx.Response(503, text="unavailable")
        return json_response({"chart": {"result": [1]}})

    transport = ScriptedTransport(respond)
    client = YahooIndexPriceClient(ProviderConfig(max_retries=1, retry_delay=0.0), transport=transport)
    provider = IndexHistoryProvider(client)
    requests = [
        make_request("SPX", security_type=SecurityType.FUTURE),
        make_request("DOWN"),
        make_request("BAD"),
    ]

    result = provider.get_history(requests)

    assert result is None
    assert len(transport.requests) == 4
    assert "No history request produced data." in [record["message"] for record in log_messages]


def test_slices_merge_symbols_and_count_data_points(stub_client: StubClient) -> None:
    provider = IndexHistoryProvider(stub_client)

    slices = list(provider.get_history([make_request("SPX"), make_request("NDX")]))

    assert [sorted(item.bars) for item in slices] == [["SPX"], ["NDX", "SPX"]]
    assert provider.data_point_count == 3


def test_fetches_happen_before_iteration(stub_client: StubClient) -> None:
    provider = IndexHistoryProvider(stub_client)

    slices = provider.get_history([make_request("SPX"), make_request("NDX")])

    assert stub_client.calls == ["SPX", "NDX"]
    assert provider.data_point_count == 0
    assert slices is not None


def test_integrity_error_surfaces_during_iteration() -> None:
    client = StubClient({"SPX": _series([MARCH_4, MARCH_5, MARCH_5 + 86400], [5130.95, 5078.65, 0.0])})
    provider = IndexHistoryProvider(client)

    slices = provider.get_history([make_request("SPX")])
    assert slices is not None

    first = next(slices)
    assert first["SPX"].close == Decimal("5130.95")
    with pytest.raises(DataIntegrityError):
        next(slices)


def test_initialize_switches_end_time_policy(stub_client: StubClient) -> None:
    provider = IndexHistoryProvider(stub_client)
    assert provider.daily_precise_end_time is False

    provider.initialize(HistoryConfig(daily_precise_end_time=True))
    (bar,) = list(provider.get_history_for(make_request("NDX")))

    assert provider.daily_precise_end_time is True
    assert bar.end_time.hour == 16


def test_from_config_wires_client_and_policy() -> None:
    transport = ScriptedTransport([json_response(chart_payload([MARCH_4]))])
    config = IndexFeedConfig(
        providers=ProviderConfig(max_retries=0, retry_delay=0.0),
        history=HistoryConfig(daily_precise_end_time=True),
    )
    client = YahooIndexPriceClient(config.providers, transport=transport)

    with IndexHistoryProvider.from_config(config, client=client) as provider:
        slices = list(provider.get_history([make_request("SPX")], slice_time_zone="America/New_York"))

    assert provider.daily_precise_end_time is True
    assert slices[0].time.hour == 16
    assert len(transport.requests) == 1
