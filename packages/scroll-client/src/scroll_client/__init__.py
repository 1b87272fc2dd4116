"""Incremental result loading with a bounded, view-synchronized window."""

from scroll_client.client import FacilityPageClient, PageFetchError, PageFetcher
from scroll_client.config import ScrollClientSettings, create_controller
from scroll_client.controller import IncrementalResultController, ScrollPhase, ScrollState
from scroll_client.models import FacilityPage, ListedFacility
from scroll_client.views import MapMarkerLayer, RenderedListView
from scroll_client.window import SlidingWindowCache, WindowView

__all__ = [
    "FacilityPage",
    "FacilityPageClient",
    "IncrementalResultController",
    "ListedFacility",
    "MapMarkerLayer",
    "PageFetchError",
    "PageFetcher",
    "RenderedListView",
    "ScrollClientSettings",
    "ScrollPhase",
    "ScrollState",
    "SlidingWindowCache",
    "WindowView",
    "create_controller",
]
