
from enum import Enum


class OperationalStatus(str, Enum):
    expiring_soon = "expiring soon"
    dead = "dead"
    surplus = "surplus"


class DispositionStatus(str, Enum):
    surplus = "surplus"


class TransferSortDirection(str, Enum):
    asc = "ASC"
    desc = "DESC"
