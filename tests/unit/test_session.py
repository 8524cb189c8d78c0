import asyncio
import threading
from unittest.mock import MagicMock

from docview.config.settings import Settings
from docview.controllers.search import SearchState
from docview.engine.facade import EngineFacade
from docview.session import open_session


class TestSessionClose:
    def test_cancels_pending_debounced_search(self, mock_engine: MagicMock) -> None:
        async def scenario() -> SearchState:
            session = open_session(
                Settings(debounce_ms=20), engine=mock_engine, facade=EngineFacade()
            )
            session.search.set_query("needle")
            session.close()
            await asyncio.sleep(0.1)
            await session.search.wait_idle()
            return session.search.state

        state = asyncio.run(scenario())

        assert state == SearchState()
        mock_engine.search_page_text.assert_not_called()

    def test_stops_dispatch_loop(self, mock_engine: MagicMock) -> None:
        async def scenario() -> threading.Thread | None:
            session = open_session(Settings(), engine=mock_engine, facade=EngineFacade())
            thread = session.dispatcher._thread
            session.close()
            return thread

        thread = asyncio.run(scenario())

        assert thread is not None
        assert not thread.is_alive()
