from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=1)


class UserLogin(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: int
    username: str
    email: str

    model_config = {
        "from_attributes": True
    }


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class Identity(BaseModel):
    """The verified caller, as carried in the bearer token."""
    id: int
    username: str


class ProfileOut(BaseModel):
    user: Identity
