from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """camelCase JSON <-> snake_case 속성 기본 스키마"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str

class MessageResponse(BaseModel):
    message: str
