import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union
from urllib.parse import quote, urlencode

import requests

from .BlipConfig import BlipConfig
from .BlipRequest import BlipRequest, Command
from .BlipResponse import BlipResponse

if TYPE_CHECKING:
    from bliphelper.bulkload.BulkLoadRequest import BulkLoadRequest


@dataclass(frozen=True)
class LocationOptions:
    """Optional parameters when retrieving a single location."""
    projection: str = "universal"  # Data projection on which to filter results
    include_refs: bool = False  # Include the objects referenced by the location


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class Blip:
    """
    The BLIP API client.

    Every call builds a new BlipRequest from the immutable configuration, so a
    single client can be shared between threads.
    """

    def __init__(self, config: BlipConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session

    def _request(self) -> BlipRequest:
        return BlipRequest(self.config, self.session)

    def ping(self) -> BlipResponse:
        return self._request().execute(Command.GET, "/ping")

    def get_brand_keys(self) -> BlipResponse:
        """ List the brandKeys the API user is authorized to access """
        return self._request().execute(Command.GET, "/brand")

    def get_brand_sources(self, brand_key: str) -> BlipResponse:
        return self._request().execute(Command.GET, f"/brand/{_segment(brand_key)}/source")

    def get_brand_projections(self, brand_key: str) -> BlipResponse:
        return self._request().execute(Command.GET, f"/brand/{_segment(brand_key)}/projection")

    def get_location_keys(self, brand_key: str, projection: str = "universal") -> BlipResponse:
        """ List the locationKeys of all locations of a brand """
        query = urlencode({"projection": projection})
        return self._request().execute(Command.GET, f"/brand/{_segment(brand_key)}/location?{query}")

    def get_location(self, brand_key: str, location_key: str, options: LocationOptions = LocationOptions()) -> BlipResponse:
        query = urlencode({"projection": options.projection,
                           "includeRefs": str(options.include_refs).lower()})
        path = f"/brand/{_segment(brand_key)}/location/{_segment(location_key)}?{query}"
        return self._request().execute(Command.GET, path)

    def query_locations(self, brand_key: str, query: Union[str, dict[str, Any]], view: str) -> BlipResponse:
        """
        Get the locations of a brand that match a BLIP query.

        Args:
            brand_key: The unique identifier for a single brand
            query: The BLIP query, either as a JSON string or as a dictionary
            view: The name of the view to return

        Returns:
            BlipResponse with the matching locations
        """
        query_document = json.loads(query) if isinstance(query, str) else query
        content = json.dumps({"query": query_document, "view": view})
        return self._request().execute(Command.POST, f"/brand/{_segment(brand_key)}/locationList", content)

    def put_location(self, brand_key: str, location_key: str, source: str, location_data: str) -> BlipResponse:
        """ Add or update a location, location_data is the JSON location document """
        query = urlencode({"source": source})
        path = f"/brand/{_segment(brand_key)}/location/{_segment(location_key)}?{query}"
        return self._request().execute(Command.PUT, path, location_data)

    def delete_location(self, brand_key: str, location_key: str, source: str) -> BlipResponse:
        query = urlencode({"source": source})
        path = f"/brand/{_segment(brand_key)}/location/{_segment(location_key)}?{query}"
        return self._request().execute(Command.DELETE, path)

    def bulk_load(self, bulk_request: "BulkLoadRequest") -> BlipResponse:
        """
        Upload a bulk location file and start its ingestion.

        The response is the one of the first step that failed, or the response
        of the bulk load trigger when every step succeeded.
        """
        from bliphelper.bulkload.BulkLoader import BulkLoader

        return BulkLoader(self._request()).load(bulk_request)
