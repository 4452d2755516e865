"""Test the pending-keystroke state machine."""

import pytest

from kestrel.pending import PendingInput, PendingState


def test_starts_idle():
    pending = PendingInput()
    assert pending.is_idle
    assert pending.count is None
    assert pending.describe() == ""


def test_digits_accumulate_into_count():
    pending = PendingInput()
    pending.push('1')
    pending.push('2')
    assert pending.state == PendingState.COUNTING
    assert pending.count == 12
    assert pending.take_count() == 12
    assert pending.is_idle


def test_operator_keeps_count():
    pending = PendingInput()
    pending.push('3')
    pending.push('g')
    assert pending.state == PendingState.AWAITING_OPERATOR
    assert pending.operator == 'g'
    assert pending.count == 3
    assert pending.describe() == "3g"


def test_awaiting_operator_cannot_be_extended():
    pending = PendingInput()
    pending.push('d')
    assert not pending.can_extend('d')
    assert not pending.can_extend('5')


def test_can_extend():
    pending = PendingInput()
    assert pending.can_extend('0')
    assert pending.can_extend(':')
    assert not pending.can_extend('x')
    assert not pending.can_extend('\u0663')  # non-ASCII digit


def test_push_rejects_other_keys():
    with pytest.raises(ValueError):
        PendingInput().push('x')


def test_reset():
    pending = PendingInput()
    pending.push('4')
    pending.push(':')
    pending.reset()
    assert pending.is_idle
    assert pending.operator is None
    assert pending.count is None
