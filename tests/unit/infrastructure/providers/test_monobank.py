# nosec B101


import pytest
from datetime import datetime, UTC
from unittest.mock import Mock, AsyncMock
import httpx

from infrastructure.providers.base import ExchangeRateProvider
from infrastructure.providers.monobank import MonobankProvider
from domain.exceptions.currency import (
    HttpStatusError,
    ProviderError,
    RateLimitedError,
    ResponseParseError,
    TransportError,
)
from domain.models.currency import BuySellQuote, CrossQuote


def make_response(status_code=200, json_data=None, text=''):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.text = text
    mock_response.json.return_value = json_data
    return mock_response


@pytest.fixture
def mock_client():
    return AsyncMock(spec=httpx.AsyncClient)


# ============================================================================
# TEST: fetch_rates() - Success Scenarios
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_rates_buy_sell_record(mock_client):
    mock_client.get.return_value = make_response(json_data=[
        {'currencyCodeA': 840, 'currencyCodeB': 980, 'date': 1727432400,
         'rateBuy': 41.0, 'rateSell': 41.5}
    ])

    provider = MonobankProvider(client=mock_client)
    rates = await provider.fetch_rates()

    assert len(rates) == 1
    rate = rates[0]
    assert rate.currency_code_a == 840
    assert rate.currency_code_b == 980
    assert rate.quote == BuySellQuote(buy=41.0, sell=41.5)
    assert rate.rate_buy == 41.0
    assert rate.rate_sell == 41.5
    assert rate.rate_cross is None
    assert rate.quoted_at == datetime.fromtimestamp(1727432400, tz=UTC)

    mock_client.get.assert_called_once_with('https://api.monobank.ua/bank/currency')


@pytest.mark.asyncio
async def test_fetch_rates_cross_record(mock_client):
    mock_client.get.return_value = make_response(json_data=[
        {'currencyCodeA': 978, 'currencyCodeB': 980, 'rateCross': 42.1234}
    ])

    provider = MonobankProvider(client=mock_client)
    rates = await provider.fetch_rates()

    assert rates[0].quote == CrossQuote(cross=42.1234)
    assert rates[0].rate_buy is None
    assert rates[0].rate_sell is None
    assert rates[0].quoted_at is None


@pytest.mark.asyncio
async def test_fetch_rates_record_without_rates_has_no_quote(mock_client):
    mock_client.get.return_value = make_response(json_data=[
        {'currencyCodeA': 933, 'currencyCodeB': 980}
    ])

    provider = MonobankProvider(client=mock_client)
    rates = await provider.fetch_rates()

    assert rates[0].quote is None


@pytest.mark.asyncio
async def test_fetch_rates_only_buy_present(mock_client):
    mock_client.get.return_value = make_response(json_data=[
        {'currencyCodeA': 840, 'currencyCodeB': 980, 'rateBuy': 41.0}
    ])

    provider = MonobankProvider(client=mock_client)
    rates = await provider.fetch_rates()

    assert rates[0].quote == BuySellQuote(buy=41.0, sell=None)


@pytest.mark.asyncio
async def test_fetch_rates_preserves_order(mock_client):
    mock_client.get.return_value = make_response(json_data=[
        {'currencyCodeA': 840, 'currencyCodeB': 980, 'rateBuy': 41.0, 'rateSell': 41.5},
        {'currencyCodeA': 978, 'currencyCodeB': 980, 'rateBuy': 44.0, 'rateSell': 44.6},
        {'currencyCodeA': 985, 'currencyCodeB': 980, 'rateCross': 10.45},
    ])

    provider = MonobankProvider(client=mock_client)
    rates = await provider.fetch_rates()

    assert [r.currency_code_a for r in rates] == [840, 978, 985]


@pytest.mark.asyncio
async def test_fetch_rates_empty_list(mock_client):
    mock_client.get.return_value = make_response(json_data=[])

    provider = MonobankProvider(client=mock_client)

    assert await provider.fetch_rates() == []


@pytest.mark.asyncio
async def test_custom_url_is_requested(mock_client):
    mock_client.get.return_value = make_response(json_data=[])

    provider = MonobankProvider(client=mock_client, url='http://localhost:8080/bank/currency')
    await provider.fetch_rates()

    mock_client.get.assert_called_once_with('http://localhost:8080/bank/currency')


# ============================================================================
# TEST: fetch_rates() - HTTP errors
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_rates_http_429_rate_limit(mock_client):
    mock_client.get.return_value = make_response(
        status_code=429, text='{"errorDescription": "Too many requests"}'
    )

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(RateLimitedError) as exc_info:
        await provider.fetch_rates()

    assert str(exc_info.value) == 'rate limited by server'


@pytest.mark.asyncio
async def test_fetch_rates_http_500_error(mock_client):
    mock_client.get.return_value = make_response(status_code=500, text='Internal Server Error')

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(HttpStatusError) as exc_info:
        await provider.fetch_rates()

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == 'http status 500'


@pytest.mark.asyncio
async def test_fetch_rates_non_200_success_code_is_an_error(mock_client):
    mock_client.get.return_value = make_response(status_code=204)

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(HttpStatusError) as exc_info:
        await provider.fetch_rates()

    assert exc_info.value.status_code == 204


# ============================================================================
# TEST: fetch_rates() - Transport and parsing errors
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_rates_network_timeout(mock_client):
    mock_client.get.side_effect = httpx.TimeoutException('Request timed out')

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(TransportError) as exc_info:
        await provider.fetch_rates()

    assert str(exc_info.value) == 'connection failure: Request timed out'
    assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)


@pytest.mark.asyncio
async def test_fetch_rates_connection_error(mock_client):
    mock_client.get.side_effect = httpx.ConnectError('Connection refused')

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(TransportError) as exc_info:
        await provider.fetch_rates()

    assert 'connection refused' in str(exc_info.value).lower()


@pytest.mark.asyncio
async def test_fetch_rates_invalid_json_response(mock_client):
    mock_response = make_response()
    mock_response.json.side_effect = ValueError('Invalid JSON')
    mock_client.get.return_value = mock_response

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(ResponseParseError) as exc_info:
        await provider.fetch_rates()

    assert str(exc_info.value).startswith('connection failure: invalid JSON')


@pytest.mark.asyncio
async def test_fetch_rates_body_is_not_a_list(mock_client):
    mock_client.get.return_value = make_response(json_data={'errorDescription': 'oops'})

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(ResponseParseError):
        await provider.fetch_rates()


@pytest.mark.asyncio
async def test_fetch_rates_record_missing_currency_code(mock_client):
    mock_client.get.return_value = make_response(json_data=[{'currencyCodeB': 980, 'rateCross': 1.0}])

    provider = MonobankProvider(client=mock_client)
    with pytest.raises(ResponseParseError) as exc_info:
        await provider.fetch_rates()

    assert isinstance(exc_info.value, TransportError)
    assert isinstance(exc_info.value, ProviderError)


@pytest.mark.asyncio
async def test_close_closes_client(mock_client):
    provider = MonobankProvider(client=mock_client)
    await provider.close()

    mock_client.aclose.assert_awaited_once()


def test_provider_implements_exchange_rate_provider(mock_client):
    provider = MonobankProvider(client=mock_client)

    assert isinstance(provider, ExchangeRateProvider)
    assert provider.name == 'monobank'


def test_exchange_rate_provider_is_abstract():
    with pytest.raises(TypeError):
        ExchangeRateProvider()
