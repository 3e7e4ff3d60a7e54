"""Tests for the toggle-follow-mode command."""

import pytest

from nirihelper.handlers import Handlers
from nirihelper.models import DelegateError, QueryMissError


@pytest.mark.asyncio
async def test_floating_window_invokes_delegate(session, delegate, floating_window):
    session.window = floating_window

    await Handlers(session, delegate).run_toggle_follow_mode()

    delegate.assert_awaited_once_with()
    assert session.sent == []


@pytest.mark.asyncio
async def test_tiled_window_is_a_noop(session, delegate, tiled_window):
    session.window = tiled_window

    await Handlers(session, delegate).run_toggle_follow_mode()

    delegate.assert_not_awaited()
    assert session.sent == []


@pytest.mark.asyncio
async def test_no_focused_window(session, delegate):
    with pytest.raises(QueryMissError):
        await Handlers(session, delegate).run_toggle_follow_mode()
    delegate.assert_not_awaited()


@pytest.mark.asyncio
async def test_delegate_failure_propagates(session, delegate, floating_window):
    session.window = floating_window
    delegate.side_effect = DelegateError("nirius not found, is it installed ?")

    with pytest.raises(DelegateError, match="nirius not found"):
        await Handlers(session, delegate).run_toggle_follow_mode()
