"""
Unit tests for the HAfAH history service
"""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
import requests

from powerup_challenge.exceptions import ApiError, NetworkError
from powerup_challenge.models.power_up import DateRange, ExtendedDateRange
from powerup_challenge.services.hafah import HafahAPI


def make_response(status=200, payload=None, json_error=None):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return HafahAPI("https://hafah.example/hafah-api/", session=session)


def test_build_query_params_uses_padded_range(api):
    date_range = DateRange(
        datetime(2025, 9, 1, tzinfo=timezone.utc),
        datetime(2025, 9, 2, tzinfo=timezone.utc)
    )
    params = api.build_query_params(ExtendedDateRange.from_range(date_range, 10))

    assert params['operation-types'] == 77
    assert params['participation-mode'] == 'all'
    assert params['page-size'] == 100
    assert params['data-size-limit'] == 200000
    assert params['from-block'] == "2025-08-31 14:00:00"
    assert params['to-block'] == "2025-09-02 10:00:00"


def test_fetch_first_page_omits_page_param(api, session):
    session.get.return_value = make_response(payload={
        'total_pages': 3,
        'operations_result': [{'trx_id': 'a'}]
    })

    page = api.fetch_page("alice", {'operation-types': 77}, 1)

    url = session.get.call_args.args[0]
    params = session.get.call_args.kwargs['params']
    assert url == "https://hafah.example/hafah-api/accounts/alice/operations"
    assert 'page' not in params
    assert page.total_pages == 3
    assert page.page_number == 1
    assert page.operations == [{'trx_id': 'a'}]


def test_fetch_later_page_adds_page_param(api, session):
    session.get.return_value = make_response(payload={'total_pages': 3, 'operations_result': []})
    query = {'operation-types': 77}

    api.fetch_page("alice", query, 3)

    assert session.get.call_args.kwargs['params']['page'] == 3
    # Base query is left untouched
    assert 'page' not in query


def test_fetch_page_http_error(api, session):
    session.get.return_value = make_response(status=503)

    with pytest.raises(ApiError) as exc_info:
        api.fetch_page("alice", {}, 1)

    assert exc_info.value.status == 503
    assert exc_info.value.endpoint == "https://hafah.example/hafah-api/accounts/alice/operations"


def test_fetch_page_network_error(api, session):
    cause = requests.ConnectionError("connection refused")
    session.get.side_effect = cause

    with pytest.raises(NetworkError) as exc_info:
        api.fetch_page("alice", {}, 1)

    assert exc_info.value.cause is cause


def test_fetch_page_invalid_json(api, session):
    session.get.return_value = make_response(json_error=ValueError("Expecting value"))

    with pytest.raises(ApiError):
        api.fetch_page("alice", {}, 1)


def test_fetch_page_does_not_retry(api, session):
    session.get.return_value = make_response(status=500)

    with pytest.raises(ApiError):
        api.fetch_page("alice", {}, 2)

    assert session.get.call_count == 1
