"""Challenge analysis result models"""
from typing import List, Optional
from pydantic import BaseModel

from powerup_challenge.models.power_up import PowerUpTransaction


class User(BaseModel):
    """
    A challenge participant.

    Power-up fields are only filled for valid users. comment_count is set when
    repeated comments of the same author are merged.
    """
    name: str
    images: List[str] = []
    power_up_date: Optional[str] = None
    power_up_amount: Optional[str] = None
    power_up_tx_id: Optional[str] = None
    power_up_transactions: Optional[List[PowerUpTransaction]] = None
    total_power_up: Optional[str] = None
    has_images: bool = False
    has_power_up: bool = False
    reason: Optional[str] = None
    comment_count: Optional[int] = None


class ChallengeAnalysis(BaseModel):
    """Final partition of the commenters of a challenge post"""
    valid_users: List[User] = []
    invalid_users: List[User] = []
    ignored_users: List[str] = []
    total_comments: int = 0

    def mention_list(self) -> str:
        """Valid users as @mentions, one per line"""
        return '\n'.join(f"@{user.name}" for user in self.valid_users)
