"""Canonical recipe data types shared by the client and the pantry core."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RecipeIngredient:
    name: str
    measure: str = ""
    amount: float | None = None  # filled by parsed()
    unit: str | None = None

    def parsed(self) -> RecipeIngredient:
        """Return a copy with amount/unit derived from the measure text."""
        from .pantry.measure import parse_measure

        m = parse_measure(self.measure)
        return RecipeIngredient(
            name=self.name, measure=self.measure, amount=m.amount, unit=m.unit
        )


@dataclass
class Recipe:
    id: str
    name: str
    category: str = ""
    area: str = ""
    instructions: str = ""
    thumbnail: str = ""
    tags: list[str] = field(default_factory=list)
    youtube: str | None = None
    source: str | None = None
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    @property
    def has_details(self) -> bool:
        return bool(self.ingredients)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "area": self.area,
            "instructions": self.instructions,
            "thumbnail": self.thumbnail,
            "tags": list(self.tags),
            "youtube": self.youtube,
            "source": self.source,
            "ingredients": [
                {"name": i.name, "measure": i.measure} for i in self.ingredients
            ],
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Recipe:
        """Rebuild a Recipe stored with to_dict()."""
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            category=data.get("category") or "",
            area=data.get("area") or "",
            instructions=data.get("instructions") or "",
            thumbnail=data.get("thumbnail") or "",
            tags=list(data.get("tags") or []),
            youtube=data.get("youtube"),
            source=data.get("source"),
            ingredients=[
                RecipeIngredient(name=i["name"], measure=i.get("measure", ""))
                for i in data.get("ingredients") or []
            ],
            calories=data.get("calories"),
            protein=data.get("protein"),
            carbs=data.get("carbs"),
            fat=data.get("fat"),
        )
