"""Tests for the order producer client."""

import queue

from sendthrottle.demo import AmendOrder, CancelOrder, Client, NewOrder, OrderMessage


def drain(inbound: "queue.Queue[OrderMessage]") -> list[OrderMessage]:
    orders = []
    while not inbound.empty():
        orders.append(inbound.get_nowait())
    return orders


class TestClient:
    def test_produces_fixed_script(self) -> None:
        inbound: queue.Queue[OrderMessage] = queue.Queue()

        Client(inbound, client_id=1).produce_orders()
        orders = drain(inbound)

        assert [type(o) for o in orders] == (
            [NewOrder, AmendOrder, CancelOrder] + [AmendOrder] * 4 + [CancelOrder] * 4
        )

    def test_descriptions_number_orders_per_client(self) -> None:
        inbound: queue.Queue[OrderMessage] = queue.Queue()

        Client(inbound, client_id=2).produce_orders()
        orders = drain(inbound)

        assert orders[0] == NewOrder("New Order Id: 0 from client 2")
        assert orders[1] == AmendOrder("Amend Order Id: 1 from client 2")
        assert orders[-1] == CancelOrder("Cancel Order Id: 10 from client 2")

    def test_run_on_thread(self) -> None:
        inbound: queue.Queue[OrderMessage] = queue.Queue()
        client = Client(inbound, client_id=1)

        client.run()
        client.join(timeout=5)

        assert inbound.qsize() == 11
