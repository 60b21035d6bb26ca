"""
基于 Pydantic v2 验证机制的配置工具.

提供:
- 格式化 ValidationError 为结构化列表
- 构建字段转换器(BeforeValidator)
- 扩展 BaseModel, 空值回退到字段默认值
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import (
    BaseModel,
    BeforeValidator,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError


def format_validation_error(exc: ValidationError) -> list[dict[str, Any]]:
    """
    将 Pydantic 的 ValidationError 转换为结构化错误列表.

    Args:
        exc: Pydantic 抛出的验证异常对象.

    Returns:
        每个错误包含字段路径/提示信息/错误类型和原始输入值.
    """
    return [
        {
            "field": ".".join(map(str, error.get("loc", ()))),
            "message": error.get("msg", None),
            "type": error.get("type", None),
            "input": error.get("input", None),
        }
        for error in exc.errors()
    ]


def convert(func: Callable[[Any], Any]) -> BeforeValidator:
    """
    构造一个在 Pydantic 验证前执行的值转换器, None 原样放行.

    转换函数抛出的任何异常都会被包装为 `Convert failed` 类型的校验错误.
    """

    def validator(data: Any) -> Any:
        if data is None:
            return data
        try:
            return func(data)
        except Exception as ex:
            raise PydanticCustomError("Convert failed", "{reason}", {"reason": str(ex)})

    return BeforeValidator(validator)


EMPTY_VALUES = ("", None)


class BaseModelEx(BaseModel):
    """
    扩展版 BaseModel: 字段值为空字符串或 None 时回退到字段默认值.
    """

    @field_validator("*", mode="wrap")
    @classmethod
    def use_default_value(
        cls: type[BaseModelEx],
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
        /,
    ) -> Any:
        if value in EMPTY_VALUES and info.field_name:
            field_info = cls.model_fields.get(info.field_name)
            if field_info is not None and not field_info.is_required():
                return field_info.get_default(call_default_factory=True)
        return handler(value)
