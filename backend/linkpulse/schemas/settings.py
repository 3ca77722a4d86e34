from typing import Literal
from .link import CamelModel


LinkDomain = Literal["lp.ai", "shrt.ly", "custom.me"]


class PlatformSettings(CamelModel):
    """User-facing platform preferences"""
    auto_enrichment: bool = True
    qr_codes: bool = True
    link_domain: LinkDomain = "lp.ai"
