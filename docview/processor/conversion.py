from abc import ABC, abstractmethod
from typing import ClassVar

from docview.engine.base import DocumentHandle
from docview.engine.facade import EngineFacade
from docview.logging.logger import Log
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import ConversionMode, PageArtifact


class PageRenderer(ABC):
    """Renders one page through exactly one facade call."""

    mode: ClassVar[ConversionMode]

    @abstractmethod
    def render(self, facade: EngineFacade, handle: DocumentHandle, page: int) -> str:
        raise NotImplementedError


class RasterPageRenderer(PageRenderer):
    mode = ConversionMode.RASTER

    def __init__(self, resolution: int) -> None:
        self._resolution = resolution

    def render(self, facade: EngineFacade, handle: DocumentHandle, page: int) -> str:
        return facade.render_page_raster(handle, page, self._resolution)


class VectorPageRenderer(PageRenderer):
    mode = ConversionMode.VECTOR

    def render(self, facade: EngineFacade, handle: DocumentHandle, page: int) -> str:
        return facade.render_page_vector(handle, page)


class MarkupPageRenderer(PageRenderer):
    mode = ConversionMode.MARKUP

    def render(self, facade: EngineFacade, handle: DocumentHandle, page: int) -> str:
        return facade.render_page_markup(handle, page)


class ConversionPipeline:
    """Renders every page of a loaded document in the requested mode.

    A failure on any page fails the whole conversion; no partial result
    is ever returned.
    """

    def __init__(self, facade: EngineFacade, render_resolution: int) -> None:
        self._facade = facade
        renderers: list[PageRenderer] = [
            RasterPageRenderer(render_resolution),
            VectorPageRenderer(),
            MarkupPageRenderer(),
        ]
        self._renderers = {renderer.mode: renderer for renderer in renderers}

    def convert(self, handle: DocumentHandle, mode: ConversionMode) -> list[PageArtifact]:
        renderer = self._renderers.get(mode)
        if renderer is None:
            raise InvalidInputError(f"Unsupported conversion mode: {mode!r}")

        count = self._facade.page_count(handle)
        with Log.timed(f"Converting {count} pages to {mode.value}"):
            return [
                PageArtifact(
                    page_number=page,
                    mode=mode,
                    content=renderer.render(self._facade, handle, page),
                )
                for page in range(1, count + 1)
            ]
