from outline_navigator.core.expansion import ExpansionState


def test_new_state_is_empty():
    state = ExpansionState()
    assert len(state) == 0
    assert not state.is_expanded((0,))


def test_toggle_adds_then_removes():
    state = ExpansionState()

    assert state.toggle((0,)) is True
    assert state.is_expanded((0,))
    assert (0,) in state

    assert state.toggle((0,)) is False
    assert not state.is_expanded((0,))


def test_double_toggle_restores_prior_state_for_every_key():
    state = ExpansionState([(1,), (1, 2)])
    before = state.snapshot()

    for key in [(0,), (1,), (1, 2), (3, 4, 5)]:
        state.toggle(key)
        state.toggle(key)

    assert state.snapshot() == before


def test_toggle_does_not_touch_other_keys():
    state = ExpansionState([(0,)])
    state.toggle((1,))
    assert state.snapshot() == frozenset({(0,), (1,)})


def test_expand_collapse_and_clear():
    state = ExpansionState()
    state.expand((2,))
    state.expand((2,))
    assert list(state) == [(2,)]

    state.collapse((2,))
    state.collapse((2,))  # collapsing an absent key is a no-op
    assert len(state) == 0

    state.expand((0,))
    state.expand((1,))
    state.clear()
    assert len(state) == 0
