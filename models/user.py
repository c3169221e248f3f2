# backend/models/user.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)  # Sin hash: solo para aprendizaje

class UserUpdate(BaseModel):
    """Actualización parcial: solo se escriben los campos enviados."""

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("name", "email", "password")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("el campo no puede ser nulo")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
