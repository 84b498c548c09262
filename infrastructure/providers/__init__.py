from .base import ExchangeRateProvider
from .monobank import MonobankProvider

__all__ = ['ExchangeRateProvider', 'MonobankProvider']
