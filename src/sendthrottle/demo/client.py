"""Producer client pushing a fixed order script into the inbound queue."""

from __future__ import annotations

import queue
import threading

from sendthrottle.demo.orders import AmendOrder, CancelOrder, NewOrder, OrderMessage


class Client:
    """Pushes orders from a worker thread.

    Script: one new, one amend, one cancel, then four amends and four cancels.
    Order ids count up from 0 for each client.
    """

    def __init__(self, inbound: queue.Queue[OrderMessage], client_id: int) -> None:
        self._inbound = inbound
        self.client_id = client_id
        self._order_id = 0
        self._worker: threading.Thread | None = None

    def run(self) -> None:
        """Start producing on a background thread."""
        self._worker = threading.Thread(
            target=self.produce_orders,
            name=f"client-{self.client_id}",
            daemon=True,
        )
        self._worker.start()

    def join(self, timeout: float | None = None) -> None:
        if self._worker is not None:
            self._worker.join(timeout)

    def produce_orders(self) -> None:
        self.push_new_order()
        self.push_amend_order()
        self.push_cancel_order()

        for _ in range(4):
            self.push_amend_order()

        for _ in range(4):
            self.push_cancel_order()

    def push_new_order(self) -> None:
        self._push(NewOrder(self._describe("New")))

    def push_amend_order(self) -> None:
        self._push(AmendOrder(self._describe("Amend")))

    def push_cancel_order(self) -> None:
        self._push(CancelOrder(self._describe("Cancel")))

    def _describe(self, kind: str) -> str:
        return f"{kind} Order Id: {self._order_id} from client {self.client_id}"

    def _push(self, order: OrderMessage) -> None:
        self._inbound.put(order)
        self._order_id += 1
