"""Tests for the waiting line state machine and customers."""

import pytest

from multiclass_queue.core import Customer, CustomerClass, EmptyLineError, WaitingLine


def make_customer(customer_id, customer_class=CustomerClass.A, arrival_time=0.0):
    return Customer(customer_id=customer_id, customer_class=customer_class,
                    arrival_time=arrival_time)


def test_first_customer_enters_service():
    line = WaitingLine()
    customer = make_customer(0)

    assert line.enqueue_or_serve(customer) is True
    assert line.is_server_busy()
    assert customer.in_service
    assert line.head() is customer
    assert line.size() == 1


def test_later_customers_queue_behind_server():
    line = WaitingLine()
    line.enqueue_or_serve(make_customer(0))
    second = make_customer(1, CustomerClass.C)

    assert line.enqueue_or_serve(second) is False
    assert not second.in_service
    assert len(line) == 2


def test_departure_promotes_next_customer():
    line = WaitingLine()
    first, second = make_customer(0), make_customer(1, CustomerClass.B)
    line.enqueue_or_serve(first)
    line.enqueue_or_serve(second)

    departed = line.depart_head()

    assert departed is first
    assert not departed.in_service
    assert second.in_service
    assert line.head() is second
    assert line.is_server_busy()


def test_last_departure_idles_server():
    line = WaitingLine()
    line.enqueue_or_serve(make_customer(0))
    line.depart_head()

    assert not line.is_server_busy()
    assert line.is_empty()
    assert line.head() is None


def test_depart_from_idle_line_raises():
    with pytest.raises(EmptyLineError):
        WaitingLine().depart_head()


def test_fifo_across_classes():
    line = WaitingLine()
    classes = [CustomerClass.C, CustomerClass.A, CustomerClass.B, CustomerClass.A]
    for i, customer_class in enumerate(classes):
        line.enqueue_or_serve(make_customer(i, customer_class))

    order = [line.depart_head().customer_id for _ in classes]

    assert order == [0, 1, 2, 3]


def test_accrue_wait_splits_delay_and_service():
    line = WaitingLine()
    serving, waiting = make_customer(0), make_customer(1)
    line.enqueue_or_serve(serving)
    line.enqueue_or_serve(waiting)

    line.accrue_wait(1.5)
    line.depart_head()
    line.accrue_wait(0.5)

    assert serving.wait == 1.5
    assert serving.delay == 0.0
    assert waiting.wait == 2.0
    assert waiting.delay == 1.5


def test_zero_accrual_is_allowed():
    customer = make_customer(0)
    customer.accrue(0.0)
    assert customer.wait == 0.0


def test_negative_accrual_rejected():
    with pytest.raises(ValueError):
        make_customer(0).accrue(-0.1)
