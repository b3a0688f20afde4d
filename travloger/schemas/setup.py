from datetime import datetime
from typing import List

from pydantic import BaseModel

from travloger.schemas.common import SuccessResponse


class SetupResponse(SuccessResponse):
    message: str
    rules_added: List[str]
    timestamp: datetime


class RulesCount(BaseModel):
    total: int = 0
    group: int = 0
    fit: int = 0
    corporate: int = 0


class SetupStatusResponse(BaseModel):
    tables_present: List[str]
    rules_count: RulesCount
    setup_complete: bool
