from datetime import datetime
from typing import List, Optional

from shared.schemas import CamelModel


class CommentCreate(CamelModel):
    text: str


class CommentUpdate(CamelModel):
    text: Optional[str] = None


class CommentResponse(CamelModel):
    id: int
    user_id: int
    user_name: str
    text: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CommentList(CamelModel):
    comments: List[CommentResponse]


class CommentResult(CamelModel):
    message: str
    comment: CommentResponse
