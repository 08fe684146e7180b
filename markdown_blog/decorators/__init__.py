from markdown_blog.decorators.with_retry import RetriableStatusError, with_retry

__all__ = ["RetriableStatusError", "with_retry"]
