from .conversion_service import ConversionService
from .history_ledger import HistoryLedger
from .rate_resolver import RateResolver
from .user_service import UserService

__all__ = ['ConversionService', 'HistoryLedger', 'RateResolver', 'UserService']
