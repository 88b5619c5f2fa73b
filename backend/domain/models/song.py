from typing import Optional
from sqlmodel import Field, SQLModel

class Song(SQLModel, table=True):
    __tablename__ = "songs"
    id: Optional[int] = Field(default=None, primary_key=True)
    group: str
    song_name: str
    release_date: str = Field(default="")
    text: str = Field(default="")
    link: str = Field(default="")
