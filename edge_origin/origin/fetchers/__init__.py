from edge_origin.origin.fetchers.base_fetcher import UpstreamFetcher
from edge_origin.origin.fetchers.file import FileFetcher
from edge_origin.origin.fetchers.http import HttpFetcher

__all__ = ["FileFetcher", "HttpFetcher", "UpstreamFetcher"]
