"""Single-server waiting line implementation."""

from collections import deque
from typing import Deque, Iterator, Optional

from multiclass_queue.core.base import Customer, EmptyLineError


class WaitingLine:
    """FIFO line with service at the front.

    The customer at the head is in service whenever the server is busy,
    and the server is busy exactly when the line is non-empty. Classes
    share one line and are served in order of arrival.
    """

    def __init__(self):
        self.customers: Deque[Customer] = deque()
        self.server_busy = False

    def enqueue_or_serve(self, customer: Customer) -> bool:
        """
        Add an arriving customer to the line.
        Returns True if the customer entered service immediately.
        """
        if not self.server_busy:
            # Idle server means an empty line, so the customer becomes the head
            self.customers.appendleft(customer)
            customer.in_service = True
            self.server_busy = True
            return True

        self.customers.append(customer)
        return False

    def depart_head(self) -> Customer:
        """Remove the customer in service and promote the next one."""
        if not self.server_busy:
            raise EmptyLineError("Cannot depart from an idle server")

        departing_customer = self.customers.popleft()
        departing_customer.in_service = False

        if self.customers:
            self.customers[0].in_service = True
        else:
            self.server_busy = False

        return departing_customer

    def accrue_wait(self, dt: float) -> None:
        """Apply an elapsed interval to every customer present."""
        for customer in self.customers:
            customer.accrue(dt)

    def head(self) -> Optional[Customer]:
        """Customer in service, or None when the server is idle."""
        return self.customers[0] if self.customers else None

    def size(self) -> int:
        return len(self.customers)

    def is_server_busy(self) -> bool:
        return self.server_busy

    def is_empty(self) -> bool:
        return not self.customers

    def __len__(self) -> int:
        return len(self.customers)

    def __iter__(self) -> Iterator[Customer]:
        return iter(self.customers)
