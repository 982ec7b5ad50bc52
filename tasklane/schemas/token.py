from pydantic import BaseModel

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPayload(BaseModel):
    sub: str | None = None
    exp: int | None = None

    @property
    def user_id(self) -> int | None:
        return int(self.sub) if self.sub and self.sub.isdigit() else None
