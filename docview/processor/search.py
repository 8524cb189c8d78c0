from docview.engine.base import POINTS_PER_INCH, DocumentHandle
from docview.engine.facade import EngineFacade
from docview.logging.logger import Log
from docview.processor.exceptions import InvalidInputError
from docview.processor.models import PageSearchResult


class SearchPipeline:
    """Collects hit geometry for a query on every page of a document.

    Page sizes are measured at a low reference resolution; they only serve to
    normalize hit coordinates, never to render anything.
    """

    def __init__(
        self,
        facade: EngineFacade,
        reference_resolution: int,
        max_hits_per_page: int,
    ) -> None:
        self._facade = facade
        self._reference_resolution = reference_resolution
        self._max_hits_per_page = max_hits_per_page

    def search(self, handle: DocumentHandle, query: str | None) -> list[PageSearchResult]:
        """Return exactly one result per page in page order.

        Raises:
            InvalidInputError: if the query is empty.
        """
        if not query:
            raise InvalidInputError("Invalid search query")

        scale = self._reference_resolution / POINTS_PER_INCH
        count = self._facade.page_count(handle)
        with Log.timed(f"Searching {count} pages for {query!r}"):
            results = []
            for page in range(1, count + 1):
                hits = self._facade.search_page_text(
                    handle, page, query, self._max_hits_per_page
                )
                results.append(
                    PageSearchResult(
                        page_number=page,
                        hits=tuple(hit.scaled(scale, scale) for hit in hits),
                        page_width=self._facade.page_width(
                            handle, page, self._reference_resolution
                        ),
                        page_height=self._facade.page_height(
                            handle, page, self._reference_resolution
                        ),
                    )
                )
            return results
