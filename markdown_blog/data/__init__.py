from markdown_blog.data.statistics import CacheStatistics

__all__ = ["CacheStatistics"]
