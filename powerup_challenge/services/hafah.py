"""HAfAH account history API integration service"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from powerup_challenge.config import TRANSFER_TO_VESTING_OP, PAGE_SIZE, DATA_SIZE_LIMIT
from powerup_challenge.exceptions import ApiError, NetworkError
from powerup_challenge.models.power_up import ExtendedDateRange

logger = logging.getLogger(__name__)


@dataclass
class OperationsPage:
    """One page of an account's operation history"""
    page_number: int
    total_pages: int
    operations: List[Dict[str, Any]] = field(default_factory=list)


class HafahAPI:
    """Reads paginated account operations from a HAfAH node"""

    def __init__(self, base_url: str = "https://api.syncad.com/hafah-api",
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def build_query_params(self, extended_range: ExtendedDateRange) -> Dict[str, Any]:
        """Base query for power ups inside the padded date range"""
        return {
            'participation-mode': 'all',
            'operation-types': TRANSFER_TO_VESTING_OP,
            'page-size': PAGE_SIZE,
            'data-size-limit': DATA_SIZE_LIMIT,
            'from-block': extended_range.from_block,
            'to-block': extended_range.to_block,
        }

    def fetch_page(self, username: str, query_params: Dict[str, Any], page_number: int) -> OperationsPage:
        """
        Fetch one page of operations for a user.

        Page 1 is requested without a page parameter, as the API expects.

        Raises:
            ApiError: On a non-success status or a body that is not JSON
            NetworkError: When no response could be obtained
        """
        params = dict(query_params)
        if page_number > 1:
            params['page'] = page_number

        data = self._make_request(f'accounts/{username}/operations', params)
        operations = data.get('operations_result') or []
        total_pages = int(data.get('total_pages') or 0)

        logger.info(f"Page {page_number}/{total_pages}: {len(operations)} operations for {username}")
        return OperationsPage(page_number=page_number, total_pages=total_pages, operations=operations)

    def _make_request(self, endpoint: str, params: Dict[str, Any]) -> dict:
        """Make a single GET request, no retries"""
        url = f'{self.base_url}/{endpoint}'
        try:
            response = self.session.get(
                url,
                params=params,
                headers={'Accept': 'application/json'},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"Network error requesting {url}: {e}", cause=e) from e

        if not response.ok:
            raise ApiError(f"HTTP error: {response.status_code}", status=response.status_code, endpoint=url)

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON response from {url}", status=response.status_code, endpoint=url) from e

        if not isinstance(data, dict):
            raise ApiError(f"Unexpected response format from {url}: {type(data)}",
                           status=response.status_code, endpoint=url)
        return data
