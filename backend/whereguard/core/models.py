from __future__ import annotations

from pydantic import BaseModel, Field


class PreloadOption(BaseModel):
    """A related model loaded alongside the main query."""
    relation: str
    table_name: str | None = None
    where: str | None = None


class RequestOptions(BaseModel):
    """Per-request query context that decides which prefixes a WHERE clause may use."""
    preload: list[PreloadOption] = Field(default_factory=list)
    join_aliases: list[str] = Field(default_factory=list)

    def allowed_prefixes(self, table_name: str = "") -> list[str]:
        """Main table, preload relation names and join aliases, in that order, without duplicates."""
        prefixes: list[str] = []
        candidates = [table_name]
        candidates.extend(item.relation for item in self.preload)
        candidates.extend(self.join_aliases)
        for name in candidates:
            if name and name not in prefixes:
                prefixes.append(name)
        return prefixes
