from .site_content import SiteContent

__all__ = ["SiteContent"]
