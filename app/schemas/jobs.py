from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobQuery(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    query: str


class JobPosting(CamelModel):
    id: str
    title: str
    company: str
    location: str | None = None
    salary: str | None = None
    description: str | None = None
    url: str
    source: str
    posted_at: str | None = None


class JobSearchRequest(CamelModel):
    # Items are decoded leniently; incomplete queries are dropped by the route.
    queries: list[Any] = Field(default_factory=list)
    location: str | None = None
    remote: bool | None = None


class JobSearchResponse(CamelModel):
    jobs: list[JobPosting]
