# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import List, Tuple

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


SIGNIN_PATH = "/signin"
HOME_PATH = "/inn/0"

# (url 前缀, 本地目录, 页脚链接文字)，文字为空时不出现在页脚
ServeDirEntry = Tuple[str, str, str]


class Settings(BaseSettings):
    """全局配置，从 .env / 环境变量读取"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 运行环境
    ENV: str = Field("dev", description="运行环境: dev / prod")

    # HTTP 服务
    HOST: str = Field(
        "127.0.0.1",
        description="监听地址",
        validation_alias=AliasChoices("HOST", "host", "ADDR"),
    )
    PORT: int = Field(
        3001,
        description="监听端口",
        validation_alias=AliasChoices("PORT", "port"),
    )
    LOG_LEVEL: str = Field(
        "INFO",
        description="日志级别: DEBUG / INFO / WARNING / ERROR",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # 站点信息（数据库中的 SiteConfig 不可用时的默认值）
    SITE_NAME: str = Field(
        "innforum",
        description="站点名称",
        validation_alias=AliasChoices("SITE_NAME", "site_name"),
    )
    SITE_DESCRIPTION: str = Field(
        "a **tiny** forum",
        description="站点描述（markdown）",
        validation_alias=AliasChoices("SITE_DESCRIPTION", "site_description"),
    )

    # 静态目录：JSON 列表，例如 [["/static/avatars", "static/imgs/avatars", ""]]
    SERVE_DIR: List[ServeDirEntry] = Field(
        default_factory=lambda: [
            ("/static/imgs", "static/imgs", ""),
            ("/static/upload", "static/upload", ""),
        ],
        description="静态目录映射 (url 前缀, 本地目录, 页脚链接文字)",
        validation_alias=AliasChoices("SERVE_DIR", "serve_dir"),
    )

    # 构建信息，由打包流程注入
    VERSION: str = Field(
        "0.1.0",
        description="版本号",
        validation_alias=AliasChoices("VERSION", "version"),
    )
    GIT_COMMIT: str = Field(
        "",
        description="git commit hash",
        validation_alias=AliasChoices("GIT_COMMIT", "git_commit"),
    )
    BUILD_SHA256: str = Field(
        "",
        description="当前构建产物的 sha256",
        validation_alias=AliasChoices("BUILD_SHA256", "CURRENT_SHA256", "build_sha256"),
    )


class SiteConfig(BaseModel):
    """站点展示配置

    正常请求时由存储层提供；错误页使用默认值。
    """

    site_name: str = Field(default_factory=lambda: settings.SITE_NAME)
    description: str = Field(default_factory=lambda: settings.SITE_DESCRIPTION)

    @classmethod
    def from_settings(cls, conf: Settings) -> "SiteConfig":
        return cls(site_name=conf.SITE_NAME, description=conf.SITE_DESCRIPTION)


settings = Settings()
