from .channels import ChannelInfoUseCase
from .play import PlayUseCase
from .search_all import SearchAllUseCase, deduplicate_results

__all__ = [
    "ChannelInfoUseCase",
    "PlayUseCase",
    "SearchAllUseCase",
    "deduplicate_results",
]
