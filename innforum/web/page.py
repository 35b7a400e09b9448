# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import markdown2

from innforum.domain import Claim
from innforum.infra.config import Settings, SiteConfig, settings as default_settings

_MD_EXTRAS = ["fenced-code-blocks", "tables", "strike", "cuddled-lists"]


def md2html(text: str) -> str:
    """markdown 转 html，原始 html 一律转义"""
    return markdown2.markdown(text or "", extras=_MD_EXTRAS, safe_mode="escape")


@dataclass(frozen=True)
class PageData:
    """每个页面公共的元数据"""
    title: str
    site_name: str
    site_description: str
    claim: Optional[Claim]
    has_unread: bool
    sha256: str
    version: str
    git_commit: str
    footer_links: Tuple[Tuple[str, str], ...]


def footer_links(conf: Settings) -> Tuple[Tuple[str, str], ...]:
    return tuple((path, link) for path, _, link in conf.SERVE_DIR if link)


def build_page_data(
    title: str,
    site_config: SiteConfig,
    claim: Optional[Claim] = None,
    has_unread: bool = False,
    *,
    settings: Optional[Settings] = None,
) -> PageData:
    conf = settings or default_settings
    return PageData(
        title=title,
        site_name=site_config.site_name,
        site_description=md2html(site_config.description),
        claim=claim,
        has_unread=has_unread,
        sha256=conf.BUILD_SHA256,
        version=conf.VERSION,
        git_commit=conf.GIT_COMMIT,
        footer_links=footer_links(conf),
    )
