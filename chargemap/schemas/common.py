from pydantic import BaseModel


class DeletedResponse(BaseModel):
    ok: bool = True
    id: int
