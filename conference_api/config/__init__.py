from .config import SiteConfig

__all__ = ["SiteConfig"]
