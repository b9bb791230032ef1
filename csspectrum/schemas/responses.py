from pydantic import BaseModel


class ConversionResult(BaseModel):
    code: str
    source_format: str
    target: str
    result: str
