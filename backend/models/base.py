from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """接口输出使用驼峰字段名，数据库存储使用下划线字段名"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    """统一响应格式 {success, data}"""
    success: bool = True
    data: T


class MessageEnvelope(Envelope[T], Generic[T]):
    message: str
