from knowledge_hub.domains.search.schemas import SearchResponse, TagListResponse

__all__ = ["SearchResponse", "TagListResponse"]
