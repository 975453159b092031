"""Power-up aggregation and eligibility rules"""
import logging
from decimal import Decimal
from typing import List, Union

from powerup_challenge.models.power_up import DateRange, PowerUpResult, PowerUpTransaction
from powerup_challenge.scanner import PowerUpScanner, AMOUNT_QUANTUM

logger = logging.getLogger(__name__)


class EligibilityResolver:
    """Decides whether a user's power ups meet the challenge minimum"""

    def __init__(self, scanner: PowerUpScanner):
        self.scanner = scanner

    def total_amount(self, transactions: List[PowerUpTransaction]) -> Decimal:
        """Sum of the transaction amounts with three decimals"""
        total = sum((Decimal(tx.amount) for tx in transactions), Decimal('0'))
        return total.quantize(AMOUNT_QUANTUM)

    def resolve(self, transactions: List[PowerUpTransaction],
                min_threshold: Union[Decimal, int, str]) -> PowerUpResult:
        """
        Aggregate power ups and apply the minimum.

        The minimum applies to the total, not to single transactions. The
        headline fields come from the first transaction of the scan, which is
        the most recent one.
        """
        if not transactions:
            return PowerUpResult(has_power_up=False)

        minimum = Decimal(str(min_threshold))
        total = self.total_amount(transactions)

        if minimum > 0 and total < minimum:
            logger.info(f"Total of {total} HIVE is below the required minimum ({minimum} HIVE)")
            return PowerUpResult(has_power_up=False)

        first = transactions[0]
        return PowerUpResult(
            has_power_up=True,
            power_up_date=first.date,
            power_up_amount=first.amount,
            power_up_tx_id=first.tx_id,
            power_up_transactions=list(transactions),
            total_power_up=f"{total:.3f}"
        )

    def check_user(self, username: str, date_range: DateRange,
                   min_threshold: Union[Decimal, int, str]) -> PowerUpResult:
        """Scan a user's history and resolve eligibility"""
        scan = self.scanner.scan(username, date_range)
        result = self.resolve(scan.transactions, min_threshold)

        if result.has_power_up:
            logger.info(f"{username} - Valid power up, total {result.total_power_up} HIVE")
        else:
            logger.info(f"{username} - No qualifying power up in range")
        return result
