from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

# (prismic_so_far, source_record) -> prismic
ContentTypeHook = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]


class FieldSpec(BaseModel):
    """Partition of source field names into the six Prismic field categories."""

    model_config = ConfigDict(frozen=True)

    text: Tuple[str, ...] = ()
    markdown: Tuple[str, ...] = ()
    external_link: Tuple[str, ...] = ()
    media: Tuple[str, ...] = ()
    date: Tuple[str, ...] = ()
    datetime: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _categories_are_disjoint(self) -> "FieldSpec":
        seen: Dict[str, str] = {}
        for category, names in self.categories():
            for name in names:
                if name in seen:
                    raise ValueError(
                        f"field {name!r} is listed in both {seen[name]!r} and {category!r}"
                    )
                seen[name] = category
        return self

    def categories(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        # Order matters: later categories overwrite earlier keys.
        return (
            ("markdown", self.markdown),
            ("text", self.text),
            ("external_link", self.external_link),
            ("media", self.media),
            ("date", self.date),
            ("datetime", self.datetime),
        )

    def all_fields(self) -> Tuple[str, ...]:
        return tuple(name for _, names in self.categories() for name in names)


class ContentType(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    source_glob: str
    source_type: str
    prismic_type: str
    field_spec: FieldSpec
    lang: str = "en-us"
    hook: Optional[ContentTypeHook] = None

    @property
    def archive_name(self) -> str:
        return f"{self.prismic_type}_upload.zip"


class ExternalLink(BaseModel):
    preview: Optional[Dict[str, Any]] = None
    target: str = "_blank"
    url: str


class MediaOrigin(BaseModel):
    url: str


class MediaRef(BaseModel):
    origin: MediaOrigin
    url: str

    @classmethod
    def from_path(cls, path: str) -> "MediaRef":
        # Stored relative to the static assets root.
        relative = path[1:] if path.startswith("/") else path
        return cls(origin=MediaOrigin(url=relative), url=relative)
