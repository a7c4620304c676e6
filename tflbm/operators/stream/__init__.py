from .stream import Streaming
