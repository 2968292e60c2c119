"""
Domain services.
"""

from .timer_service import TimerService
from .billing_service import BillingService, InvoiceTotals
from .numbering_service import NumberingService
