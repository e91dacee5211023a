import pytest

from app.client import toggle
from app.client.errors import ConflictError, TransientError
from app.client.toggle import Idle, Pending, RolledBack


def test_start_flips_value_and_count():
    pending = toggle.start(Idle(value=False, count=3))
    assert pending == Pending(previous_value=False, previous_count=3, value=True, count=4)

    pending = toggle.start(Idle(value=True, count=4))
    assert (pending.value, pending.count) == (False, 3)


def test_count_never_goes_negative():
    pending = toggle.start(Idle(value=True, count=0))
    assert pending.count == 0


def test_start_from_rolled_back():
    rolled = RolledBack(value=False, count=2, error=TransientError())
    assert toggle.start(rolled).value is True


def test_start_while_pending_is_an_error():
    pending = toggle.start(Idle(value=False, count=0))
    with pytest.raises(ValueError):
        toggle.start(pending)


def test_resolve_success_keeps_optimistic_value():
    pending = toggle.start(Idle(value=False, count=1))
    assert toggle.resolve(pending) == Idle(value=True, count=2)


def test_resolve_failure_restores_previous_values():
    pending = toggle.start(Idle(value=False, count=1))
    error = TransientError(status=500)
    state = toggle.resolve(pending, error)
    assert isinstance(state, RolledBack)
    assert (state.value, state.count, state.error) == (False, 1, error)


def test_conflict_counts_as_success_only_when_turning_on():
    on = toggle.start(Idle(value=False, count=1))
    assert toggle.resolve(on, ConflictError(status=409)) == Idle(value=True, count=2)

    off = toggle.start(Idle(value=True, count=1))
    assert isinstance(toggle.resolve(off, ConflictError(status=409)), RolledBack)


def test_abort_restores_previous_values_without_error():
    pending = toggle.start(Idle(value=False, count=2))
    assert toggle.abort(pending) == Idle(value=False, count=2)
