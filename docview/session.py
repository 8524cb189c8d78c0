from dataclasses import dataclass

from docview.config.settings import Settings
from docview.controllers.processing import ProcessingStateController
from docview.controllers.search import SearchStateController
from docview.engine.base import BaseDocumentEngine
from docview.engine.facade import EngineFacade, default_facade
from docview.engine.factory import EngineFactory
from docview.gateway.gateway import RequestGateway
from docview.logging.logger import Log
from docview.worker.channel import Channel
from docview.worker.dispatch import DispatchLoop


@dataclass
class Session:
    settings: Settings
    facade: EngineFacade
    channel: Channel
    dispatcher: DispatchLoop
    gateway: RequestGateway
    processing: ProcessingStateController
    search: SearchStateController

    def close(self) -> None:
        self.search.clear()
        self.gateway.close()
        self.dispatcher.stop()


def open_session(
    settings: Settings | None = None,
    engine: BaseDocumentEngine | None = None,
    facade: EngineFacade | None = None,
) -> Session:
    """Entry point: configure logging -> initialize engine -> start dispatch -> wire controllers.

    Must be called from the foreground event loop. Without an explicit engine the
    configured one is built in the background; requests sent before it is ready
    fail with an engine-not-ready error.
    """
    settings = settings if settings is not None else Settings()
    facade = facade if facade is not None else default_facade
    Log.configure(settings.log_level)

    if engine is not None:
        facade.initialize(engine)
    elif not facade.is_ready:
        facade.initialize_in_background(lambda: EngineFactory.create(settings))

    channel = Channel()
    dispatcher = DispatchLoop(channel, facade, settings)
    dispatcher.start()
    gateway = RequestGateway(channel)

    processing: ProcessingStateController
    search = SearchStateController(
        gateway, settings, file_provider=lambda: processing.state.active_file
    )
    processing = ProcessingStateController(gateway, settings, search=search)
    return Session(
        settings=settings,
        facade=facade,
        channel=channel,
        dispatcher=dispatcher,
        gateway=gateway,
        processing=processing,
        search=search,
    )
