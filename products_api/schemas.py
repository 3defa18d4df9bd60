from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: float = Field(strict=True, allow_inf_nan=False)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def reject_null_required_fields(cls, data: Any) -> Any:
        # name and price may be omitted but never cleared.
        if isinstance(data, dict):
            for key in ("name", "price"):
                if key in data and data[key] is None:
                    raise ValueError(f"{key} cannot be null")
        return data


class ProductRead(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
