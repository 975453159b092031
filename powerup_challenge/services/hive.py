"""Hive JSON-RPC content API integration service"""
import logging
from typing import Any, Dict, List, Optional

import requests

from powerup_challenge.exceptions import ApiError, NetworkError

logger = logging.getLogger(__name__)


class HiveAPI:
    """Read-only access to post replies through a Hive API node"""

    def __init__(self, node_url: str = "https://api.hive.blog",
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.node_url = node_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self._request_id = 0

    def get_content_replies(self, author: str, permlink: str) -> List[Dict[str, Any]]:
        """Get all direct replies of a post"""
        logger.info(f"Fetching replies of @{author}/{permlink}")
        comments = self._call('condenser_api.get_content_replies', [author, permlink])
        if not isinstance(comments, list):
            raise ApiError(f"Unexpected replies format: {type(comments)}", endpoint=self.node_url)

        logger.info(f"{len(comments)} comments found")
        return comments

    def _call(self, method: str, params: list) -> Any:
        """Make a JSON-RPC call and return its result"""
        self._request_id += 1
        payload = {
            'jsonrpc': '2.0',
            'method': method,
            'params': params,
            'id': self._request_id
        }

        try:
            response = self.session.post(self.node_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Network error calling {method}: {e}", cause=e) from e

        if not response.ok:
            raise ApiError(f"HTTP error: {response.status_code}", status=response.status_code, endpoint=self.node_url)

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON response for {method}", status=response.status_code,
                           endpoint=self.node_url) from e

        if not isinstance(body, dict):
            raise ApiError(f"Unexpected response format for {method}: {type(body)}",
                           status=response.status_code, endpoint=self.node_url)

        if body.get('error'):
            raise ApiError(f"RPC error in {method}: {body['error']}", status=response.status_code,
                           endpoint=self.node_url)

        return body.get('result')
