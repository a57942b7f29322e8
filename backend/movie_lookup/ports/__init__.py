from movie_lookup.ports.fetch_port import FetchPort, FetchResponse
from movie_lookup.ports.log_port import LogPort

__all__ = [
    "FetchPort",
    "FetchResponse",
    "LogPort",
]
