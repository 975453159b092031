"""
Pytest configuration and fixtures for challenge analysis tests
"""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from powerup_challenge.models.power_up import DateRange
from powerup_challenge.services.hafah import HafahAPI, OperationsPage


@pytest.fixture
def date_range():
    """September 1st to September 7th 2025, UTC"""
    return DateRange(
        datetime(2025, 9, 1, 0, 0, 0, tzinfo=timezone.utc),
        datetime(2025, 9, 7, 23, 59, 59, tzinfo=timezone.utc)
    )


@pytest.fixture
def make_operation():
    """Factory for raw HAfAH transfer_to_vesting operations"""
    def _make(trx_id, timestamp, amount="10000", op_type_id=77, precision=3):
        return {
            'block': 98000000,
            'trx_id': trx_id,
            'op_type_id': op_type_id,
            'timestamp': timestamp,
            'virtual_op': False,
            'op': {
                'type': 'transfer_to_vesting_operation',
                'value': {
                    'from_account': 'alice',
                    'to_account': 'alice',
                    'hive_vested': {'amount': amount, 'precision': precision, 'nai': '@@000000021'}
                }
            }
        }
    return _make


@pytest.fixture
def hafah_api():
    """
    HafahAPI double serving canned pages.

    Set `hafah_api.pages = {page_number: [operations]}` before scanning.
    """
    api = Mock(spec=HafahAPI)
    api.pages = {}
    api.build_query_params.return_value = {'operation-types': 77}

    def _fetch_page(username, query_params, page_number):
        return OperationsPage(
            page_number=page_number,
            total_pages=len(api.pages),
            operations=api.pages.get(page_number, [])
        )

    api.fetch_page.side_effect = _fetch_page
    return api
