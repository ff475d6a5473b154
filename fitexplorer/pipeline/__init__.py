from .controller import ExplorerController, ExplorerState, DisplayState
from .sink import NullSink, RenderSink

__all__ = [
    "ExplorerController",
    "ExplorerState",
    "DisplayState",
    "NullSink",
    "RenderSink",
]
