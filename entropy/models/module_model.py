from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    DESIGN = "Design"
    FILMMAKING = "Filmmaking"
    MUSIC = "Music"


# orden fijo en el que se agrupa el catálogo
CATEGORY_ORDER = [Category.DESIGN, Category.FILMMAKING, Category.MUSIC]


class Module(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: int
    category: Category
    title: str
    description: str
    duration: str
    level: str
    video_url: str = Field(alias="videoUrl")
    enrolled: int = Field(default=0, ge=0)

    def to_public(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_document(self) -> dict:
        doc = self.to_public()
        doc["_id"] = doc.pop("id")
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "Module":
        data = dict(doc)
        data["id"] = data.pop("_id")
        return cls(**data)


# los ids se guardan como int64 en Mongo; fuera de rango no pueden existir
MAX_MODULE_ID = 2 ** 63 - 1
