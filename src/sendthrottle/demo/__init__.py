"""Restaurant order demo: producer clients feeding a throttled order processor."""

from sendthrottle.demo.client import Client
from sendthrottle.demo.orders import AmendOrder, CancelOrder, NewOrder, OrderMessage
from sendthrottle.demo.processor import OrderProcessor, PrintingCallback

__all__ = [
    "AmendOrder",
    "CancelOrder",
    "Client",
    "NewOrder",
    "OrderMessage",
    "OrderProcessor",
    "PrintingCallback",
]
