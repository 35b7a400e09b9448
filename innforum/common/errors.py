# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""错误分类

业务代码只负责 raise 这里的异常，状态码与页面渲染统一在
exception_handlers 中完成。新增子类时必须同步更新状态码表。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(eq=False)
class AppError(Exception):
    """异常统一"""
    code: str
    message: str
    detail: Optional[Any] = None

    def __str__(self) -> str:
        if self.detail is None:
            return self.message
        return f"{self.message}: {self.detail}"


class CaptchaError(AppError):
    def __init__(self) -> None:
        super().__init__(code="CAPTCHA_ERROR", message="Captcha Error")


class NameExists(AppError):
    def __init__(self) -> None:
        super().__init__(code="NAME_EXISTS", message="Name already exists")


class InnCreateLimit(AppError):
    def __init__(self) -> None:
        super().__init__(code="INN_CREATE_LIMIT", message="Inn creation limit reached")


class UsernameInvalid(AppError):
    def __init__(self) -> None:
        super().__init__(code="USERNAME_INVALID", message="Username should not start with a number, should not contain '@' or '#'")


class WrongPassword(AppError):
    def __init__(self) -> None:
        super().__init__(code="WRONG_PASSWORD", message="Wrong password")


class ImageError(AppError):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(code="IMAGE_ERROR", message="Image processing failed", detail=detail)


class Locked(AppError):
    def __init__(self) -> None:
        super().__init__(code="LOCKED", message="The post has been locked by mod")


class Hidden(AppError):
    def __init__(self) -> None:
        super().__init__(code="HIDDEN", message="The post has been hidden by mod")


class ReadOnly(AppError):
    def __init__(self) -> None:
        super().__init__(code="READ_ONLY", message="Site is in read only mode")


class ValidationFailed(AppError):
    """表单语义校验失败，detail 为 {字段: [错误信息, ...]}"""

    def __init__(self, detail: Dict[str, List[str]]) -> None:
        super().__init__(code="VALIDATION_ERROR", message="Validation error", detail=detail)

    @property
    def violations(self) -> Dict[str, List[str]]:
        return self.detail

    def __str__(self) -> str:
        parts = [f"{field}: {', '.join(msgs)}" for field, msgs in self.detail.items()]
        return f"{self.message}: {'; '.join(parts)}"


class NoJoinedInn(AppError):
    def __init__(self) -> None:
        super().__init__(code="NO_JOINED_INN", message="You must join inn first")


class FormRejection(AppError):
    """请求体无法解析为目标表单结构"""

    def __init__(self, detail: Any = None) -> None:
        super().__init__(code="FORM_REJECTION", message="Failed to deserialize form", detail=detail)


class NotFound(AppError):
    def __init__(self) -> None:
        super().__init__(code="NOT_FOUND", message="Not found")


class WriteInterval(AppError):
    def __init__(self) -> None:
        super().__init__(code="WRITE_INTERVAL", message="Rate limit exceeded, please try again later")


class NonLogin(AppError):
    def __init__(self) -> None:
        super().__init__(code="NON_LOGIN", message="Please login first")


class Unauthorized(AppError):
    def __init__(self) -> None:
        super().__init__(code="UNAUTHORIZED", message="Unauthorized")


class Banned(AppError):
    def __init__(self) -> None:
        super().__init__(code="BANNED", message="You have been banned")


class InternalError(AppError):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(code="INTERNAL_ERROR", message="Internal server error", detail=detail)


class StorageError(AppError):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(code="STORAGE_ERROR", message="Storage error", detail=detail)


class IoError(AppError):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(code="IO_ERROR", message="IO error", detail=detail)


class Custom(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(code="CUSTOM", message=message)
