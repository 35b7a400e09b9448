# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""表单解析 + 校验

两步严格按顺序执行，任何一步失败立即抛出，不会产生半成品：
1. decode_form：按 pydantic 模型解析表单（结构）
2. check_form：调用模型的 validate_form（语义）

路由中通过 Depends(validated_form(Model)) 使用。
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Collection,
    Dict,
    FrozenSet,
    Generic,
    Iterable,
    List,
    Mapping,
    Protocol,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel, Field, ValidationError
from starlette.requests import Request

from innforum.common.errors import FormRejection, ValidationFailed

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

FieldValue = Union[str, List[str]]


class Validate(Protocol):
    def validate_form(self) -> Dict[str, List[str]]: ...


class FormModel(BaseModel):
    """表单模型基类，子类覆写 validate_form 返回 {字段: [错误信息]}，为空表示通过"""

    def validate_form(self) -> Dict[str, List[str]]:
        return {}


T = TypeVar("T", bound=BaseModel)
V = TypeVar("V", bound=Validate)


@dataclass(frozen=True)
class ValidatedForm(Generic[T]):
    value: T


_SEQUENCE_ORIGINS = (list, set, frozenset, tuple)
_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


def list_fields(model: Type[BaseModel]) -> FrozenSet[str]:
    """模型中声明为列表/集合的字段，这些字段即使只提交一个值也按列表收集"""
    names = set()
    for name, info in model.model_fields.items():
        candidates = [info.annotation]
        if get_origin(info.annotation) in _UNION_ORIGINS:
            candidates = list(get_args(info.annotation))
        if any(get_origin(tp) in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS for tp in candidates):
            names.add(info.alias or name)
    return frozenset(names)


def collect_fields(items: Iterable[Tuple[str, Any]], as_list: Collection[str] = ()) -> Dict[str, FieldValue]:
    """同名字段出现多次时合并为列表；as_list 中的字段始终为列表"""
    data: Dict[str, FieldValue] = {}
    for key, value in items:
        if not isinstance(value, str):
            continue
        if key in as_list:
            data.setdefault(key, []).append(value)
        elif key not in data:
            data[key] = value
        elif isinstance(data[key], list):
            data[key].append(value)
        else:
            data[key] = [data[key], value]
    return data


def decode_form(model: Type[T], data: Mapping[str, Any]) -> T:
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise FormRejection(detail=_rejection_text(e)) from e


def check_form(value: V) -> V:
    violations = value.validate_form()
    if violations:
        raise ValidationFailed({field: list(msgs) for field, msgs in violations.items()})
    return value


def extract_validated(model: Type[T], data: Mapping[str, Any]) -> ValidatedForm[T]:
    value = decode_form(model, data)
    return ValidatedForm(check_form(value))


def validated_form(model: Type[T]) -> Callable[[Request], Awaitable[ValidatedForm[T]]]:
    """生成 FastAPI 依赖：GET/HEAD 读 query，其余方法读 urlencoded 请求体"""

    sequence_fields = list_fields(model)

    async def _extract(request: Request) -> ValidatedForm[T]:
        if request.method in ("GET", "HEAD"):
            data = collect_fields(request.query_params.multi_items(), sequence_fields)
        else:
            content_type = request.headers.get("content-type", "")
            if content_type.split(";", 1)[0].strip().lower() != FORM_CONTENT_TYPE:
                raise FormRejection(detail=f"Form requests must have `Content-Type: {FORM_CONTENT_TYPE}`")
            form = await request.form()
            data = collect_fields(form.multi_items(), sequence_fields)
        return extract_validated(model, data)

    return _extract


def _rejection_text(e: ValidationError) -> str:
    parts = []
    for item in e.errors(include_url=False):
        loc = ".".join(str(p) for p in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)


class ParamsPage(FormModel):
    """分页参数：从 anchor 开始取 n 条，is_desc 控制排序方向"""

    anchor: int = Field(0, ge=0)
    n: int = Field(30, ge=0)
    is_desc: bool = True
