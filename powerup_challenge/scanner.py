"""Power-up scanning over a user's paginated operation history"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set

from powerup_challenge.config import TRANSFER_TO_VESTING_OP, MAX_PAGES, MARGIN_HOURS
from powerup_challenge.models.power_up import DateRange, ExtendedDateRange, PowerUpTransaction
from powerup_challenge.services.hafah import HafahAPI, OperationsPage
from powerup_challenge.utils.dates import parse_operation_timestamp, format_display

logger = logging.getLogger(__name__)

AMOUNT_QUANTUM = Decimal('0.001')
DEFAULT_PRECISION = 3


class StopReason(str, Enum):
    """Why the page walk ended"""
    EXHAUSTED = "exhausted"          # every page was read
    OUT_OF_RANGE = "out_of_range"    # reached operations older than the padded range
    PAGE_LIMIT = "page_limit"        # MAX_PAGES pages read


@dataclass
class PageScan:
    """Outcome of evaluating the operations of one page"""
    transactions: List[PowerUpTransaction] = field(default_factory=list)
    reached_lower_bound: bool = False


@dataclass
class ScanResult:
    """Validated, deduplicated power ups of one user plus walk bookkeeping"""
    username: str
    transactions: List[PowerUpTransaction]
    pages_fetched: int
    stop_reason: StopReason


def parse_vested_amount(operation: Dict[str, Any]) -> Decimal:
    """HIVE amount of a transfer_to_vesting operation, quantized to three decimals"""
    vested = (((operation.get('op') or {}).get('value') or {}).get('hive_vested') or {})
    try:
        precision = int(vested.get('precision', DEFAULT_PRECISION))
        return Decimal(str(vested['amount'])).scaleb(-precision).quantize(AMOUNT_QUANTUM)
    except (KeyError, TypeError, ValueError, InvalidOperation):
        logger.warning(f"Power up {operation.get('trx_id')} has no readable hive_vested amount")
        return Decimal('0').quantize(AMOUNT_QUANTUM)


class PowerUpScanner:
    """
    Finds the power ups of a user inside an exact date range.

    The history API filters by a padded range because its block-range filter
    is coarse. Pages are walked from the last one to the first, so timestamps
    never increase along the walk: once an operation older than the padded
    range shows up, no later page can hold a match and paging stops. Every
    candidate is still checked against the exact range locally.
    """

    def __init__(self, api: HafahAPI, margin_hours: int = MARGIN_HOURS, max_pages: int = MAX_PAGES):
        self.api = api
        self.margin_hours = margin_hours
        self.max_pages = max_pages

    def scan(self, username: str, date_range: DateRange) -> ScanResult:
        """Collect the power ups of a user within the exact date range"""
        extended_range = ExtendedDateRange.from_range(date_range, self.margin_hours)
        query_params = self.api.build_query_params(extended_range)

        logger.info(f"Checking power ups for {username} between "
                    f"{format_display(date_range.start_date)} and {format_display(date_range.end_date)} "
                    f"(API range {extended_range.from_block} - {extended_range.to_block})")

        transactions: List[PowerUpTransaction] = []
        seen_tx_ids: Set[str] = set()
        pages_fetched = 0
        stop_reason = StopReason.EXHAUSTED

        for page in self._iter_pages(username, query_params):
            pages_fetched += 1
            page_scan = self._scan_page(username, page, date_range, extended_range, seen_tx_ids)
            transactions.extend(page_scan.transactions)

            if page_scan.reached_lower_bound:
                stop_reason = StopReason.OUT_OF_RANGE
                logger.info(f"{username} - Reached operations older than {extended_range.from_block}, "
                            f"stopping at page {page.page_number}")
                break

            if pages_fetched >= self.max_pages and page.page_number > 1:
                stop_reason = StopReason.PAGE_LIMIT
                logger.warning(f"Reached the limit of {self.max_pages} pages for {username}")
                break

        logger.info(f"{username} - {len(transactions)} unique power up(s) in range "
                    f"after {pages_fetched} page(s)")

        return ScanResult(
            username=username,
            transactions=transactions,
            pages_fetched=pages_fetched,
            stop_reason=stop_reason
        )

    def _iter_pages(self, username: str, query_params: Dict[str, Any]) -> Iterator[OperationsPage]:
        """Yield pages from the last to the first, fetching each one lazily"""
        first_page = self.api.fetch_page(username, query_params, 1)
        total_pages = max(first_page.total_pages, 1)
        logger.info(f"{username} - {total_pages} page(s) available, walking back from the last one")

        for page_number in range(total_pages, 0, -1):
            if page_number == 1:
                yield first_page
            else:
                yield self.api.fetch_page(username, query_params, page_number)

    def _scan_page(self, username: str, page: OperationsPage, date_range: DateRange,
                   extended_range: ExtendedDateRange, seen_tx_ids: Set[str]) -> PageScan:
        """
        Evaluate every operation of a page.

        An operation older than the padded range only flags the page as the
        last one; the remaining operations of the page are still evaluated.
        """
        result = PageScan()

        for operation in page.operations:
            if operation.get('op_type_id') != TRANSFER_TO_VESTING_OP:
                continue

            try:
                op_date = parse_operation_timestamp(operation['timestamp'])
            except (KeyError, TypeError, ValueError):
                logger.warning(f"{username} - Skipping operation with unreadable timestamp: "
                               f"{operation.get('timestamp')}")
                continue

            if op_date < extended_range.from_block_date:
                result.reached_lower_bound = True
                continue

            if not date_range.contains(op_date):
                continue

            transaction = self._to_transaction(username, operation, op_date, seen_tx_ids)
            if transaction:
                result.transactions.append(transaction)

        return result

    def _to_transaction(self, username: str, operation: Dict[str, Any], op_date,
                        seen_tx_ids: Set[str]) -> Optional[PowerUpTransaction]:
        tx_id = operation.get('trx_id')
        if tx_id in seen_tx_ids:
            logger.info(f"{username} - Ignoring duplicated transaction {tx_id}")
            return None
        seen_tx_ids.add(tx_id)

        transaction = PowerUpTransaction(
            date=format_display(op_date),
            amount=f"{parse_vested_amount(operation):.3f}",
            tx_id=str(tx_id)
        )
        logger.info(f"{username} - Power up found: {transaction.amount} HIVE on {transaction.date} "
                    f"(tx {transaction.tx_id})")
        return transaction
