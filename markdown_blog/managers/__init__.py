from markdown_blog.managers.cache_manager import BlogCacheManager

__all__ = ["BlogCacheManager"]
