"""
Annotation Synchronization Engine

Keeps user highlights in sync with a paginated document renderer and reports
the current page.
"""

from .highlights import Highlight, HighlightColor, HighlightStore
from .renderer import EventSubscription, Renderer, SelectionContents
from .synchronizer import AnnotationSynchronizer, SyncState
from .locator import LocationIndex, PageLocator
from .session import ReaderSession

__all__ = [
    'Highlight',
    'HighlightColor',
    'HighlightStore',
    'EventSubscription',
    'Renderer',
    'SelectionContents',
    'AnnotationSynchronizer',
    'SyncState',
    'LocationIndex',
    'PageLocator',
    'ReaderSession',
]
