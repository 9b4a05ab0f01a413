from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence
from urllib.parse import unquote_plus, urlparse

from app.ai.types import AIClient
from app.core.hashing import stable_hash
from app.normalize.coerce import coerce_job_objects, coerce_non_empty_str
from app.parsing.response import parse_embedded_json
from app.schemas.jobs import JobPosting, JobQuery
from app.services.company_names import normalise_company_name, sample_company, slugify
from app.services.job_providers import PROVIDERS, SearchProvider, find_provider_for_host, select_provider

logger = logging.getLogger(__name__)

MIN_FALLBACK_PER_QUERY = 5
MIN_AI_POSTINGS = 12
MAX_AI_POSTINGS = 20


def target_posting_count(query_count: int) -> int:
    return min(max(query_count * 3, MIN_AI_POSTINGS), MAX_AI_POSTINGS)


def build_job_prompt(queries: Sequence[JobQuery], location: str | None, remote: bool) -> str:
    directives = "\n".join(
        f"{index}. Title: {query.title}\n   Search: {query.query}" for index, query in enumerate(queries, start=1)
    )
    location_line = location or "No explicit preference"
    remote_line = "Remote or remote-first roles only" if remote else "No remote requirement specified"

    instruction = (
        "You are an expert technical recruiter. Based on the search directives below, recommend up to "
        f"{target_posting_count(len(queries))} appealing job opportunities. Reply strictly in minified JSON with the schema:\n"
        '{"jobs": [{"title": string, "company": string, "location": string, "salary": string?, '
        '"description": string, "link": string, "postedAt": string?}]}.\n'
        "Hard requirements:\n"
        "- company must be the real hiring employer. Never use placeholders such as 'Various companies' or 'Confidential'.\n"
        "- Every link must be an https URL to a reputable job board search or the employer's careers page "
        "(LinkedIn, Indeed, Glassdoor, JobStreet, Prosple, SEEK, Greenhouse, Lever, Ashby, etc.).\n"
        "- If you do not know an exact posting, construct a pre-filled job search URL that includes the company, "
        "the relevant keywords and the location.\n"
        "- Descriptions should be concise (<= 55 words), benefit-led, and specific to the role.\n"
        "- Do not emit markdown, explanations, or additional keys."
    )
    return (
        f"{instruction}\n\nSearch directives:\n{directives}\n\n"
        f"Preferred location: {location_line}\nRemote preference: {remote_line}"
    )


def resolve_location(value: Any, location: str | None, remote: bool) -> str | None:
    explicit = coerce_non_empty_str(value)
    if explicit:
        return explicit
    if remote:
        return "Remote"
    return location or None


def _link_mentions_company(link: str, company: str) -> bool:
    slug = slugify(company)
    return bool(slug) and slug in slugify(unquote_plus(link))


def ensure_company_link(
    raw_link: Any,
    company: str,
    fallback_query: JobQuery,
    location: str | None,
    remote: bool,
    index: int,
    providers: tuple[SearchProvider, ...] = PROVIDERS,
) -> tuple[str, str]:
    """Return ``(url, source)`` for a posting, rebuilding links that cannot be trusted."""
    fallback_provider = select_provider(stable_hash(f"{fallback_query.query}:{company}:{index}"), providers)
    fallback = (
        fallback_provider.build_url(fallback_query.query, company, location, remote),
        fallback_provider.label,
    )

    link = raw_link.strip() if isinstance(raw_link, str) else ""
    if not link.startswith("https://"):
        return fallback

    try:
        hostname = urlparse(link).hostname
    except ValueError:
        return fallback
    if not hostname:
        return fallback

    mentions_company = _link_mentions_company(link, company)
    provider = find_provider_for_host(hostname, providers)
    if provider is not None:
        if mentions_company:
            return link, provider.label
        # Right board, wrong search: rebuild it for the normalised company.
        return provider.build_url(fallback_query.query, company, location, remote), provider.label

    if mentions_company:
        return link, f"{company} careers"
    return link, fallback[1]


def dedupe_postings(postings: Sequence[JobPosting]) -> list[JobPosting]:
    seen_keys: set[tuple[str, str, str]] = set()
    seen_ids: set[str] = set()
    unique: list[JobPosting] = []
    for index, posting in enumerate(postings):
        key = (posting.title.strip().lower(), posting.company.strip().lower(), posting.url.strip().lower())
        if key in seen_keys:
            continue
        seen_keys.add(key)
        if posting.id in seen_ids:
            posting = posting.model_copy(update={"id": f"{posting.id}-{index}"})
        seen_ids.add(posting.id)
        unique.append(posting)
    return unique


def build_fallback_jobs(
    queries: Sequence[JobQuery],
    location: str | None,
    remote: bool,
    *,
    stamp: int,
    providers: tuple[SearchProvider, ...] = PROVIDERS,
) -> list[JobPosting]:
    per_query = max(len(providers), MIN_FALLBACK_PER_QUERY)
    location_label = "Remote" if remote else (location or "Flexible location")
    if remote:
        framing = "with remote-first flexibility"
    elif location:
        framing = f"in {location}"
    else:
        framing = "across flexible locations"

    postings: list[JobPosting] = []
    for query_index, query in enumerate(queries):
        for offset in range(per_query):
            company = sample_company(query, query_index + offset)
            provider = select_provider(
                stable_hash(f"{query.title}:{query.query}:{query_index}:{offset}"), providers
            )
            postings.append(
                JobPosting(
                    id=f"fallback-{query_index}-{offset}-{stamp}",
                    title=f"{query.title} at {company}",
                    company=company,
                    location=location_label,
                    description=(
                        f"{company} is a strong match for {query.title} roles {framing}. "
                        f"Open the {provider.name} search to review live listings for “{query.query}”."
                    ),
                    url=provider.build_url(query.query, company, location, remote),
                    source=provider.label,
                )
            )
    return dedupe_postings(postings)


class JobSynthesisEngine:
    """Turns job queries into postings, via the AI client when it cooperates.

    Every failure on the AI path degrades to the deterministic fallback, so
    ``synthesize_jobs`` always returns a non-empty list for non-empty input.
    """

    def __init__(
        self,
        ai_client: AIClient | None,
        *,
        providers: tuple[SearchProvider, ...] = PROVIDERS,
        clock: Callable[[], float] = time.time,
    ):
        if not providers:
            raise ValueError("At least one search provider is required.")
        self._ai_client = ai_client
        self._providers = providers
        self._clock = clock

    @property
    def model_ready(self) -> bool:
        return self._ai_client is not None

    def _stamp(self) -> int:
        return int(self._clock() * 1000)

    def fallback(self, queries: Sequence[JobQuery], location: str | None, remote: bool) -> list[JobPosting]:
        return build_fallback_jobs(queries, location, remote, stamp=self._stamp(), providers=self._providers)

    def assemble(
        self,
        raw_jobs: Sequence[dict[str, Any]],
        queries: Sequence[JobQuery],
        location: str | None,
        remote: bool,
    ) -> list[JobPosting]:
        stamp = self._stamp()
        postings: list[JobPosting] = []
        for index, raw in enumerate(raw_jobs):
            fallback_query = queries[index % len(queries)]
            raw_link = raw.get("link")
            if not isinstance(raw_link, str):
                raw_link = raw.get("url")
            link_hint = raw_link if isinstance(raw_link, str) else None

            company = normalise_company_name(raw.get("company"), link_hint, fallback_query, index)
            url, source = ensure_company_link(
                raw_link, company, fallback_query, location, remote, index, self._providers
            )
            if not url:
                continue
            postings.append(
                JobPosting(
                    id=coerce_non_empty_str(raw.get("id")) or f"ai-{stamp}-{index}",
                    title=coerce_non_empty_str(raw.get("title")) or fallback_query.title,
                    company=company,
                    location=resolve_location(raw.get("location"), location, remote),
                    salary=coerce_non_empty_str(raw.get("salary")),
                    description=coerce_non_empty_str(raw.get("description"))
                    or f"Review opportunities that align with {fallback_query.title}.",
                    url=url,
                    source=source,
                    posted_at=coerce_non_empty_str(raw.get("postedAt")),
                )
            )
        return dedupe_postings(postings)

    async def synthesize_jobs(
        self,
        queries: Sequence[JobQuery],
        location: str | None = None,
        remote: bool = False,
    ) -> list[JobPosting]:
        if not queries:
            raise ValueError("At least one job query is required.")
        location = (location or "").strip() or None
        remote = bool(remote)

        if self._ai_client is None:
            logger.info("job_synthesis_fallback reason=model_unavailable queries=%s", len(queries))
            return self.fallback(queries, location, remote)

        model = getattr(self._ai_client, "model", "unknown")
        try:
            text = await self._ai_client.generate(build_job_prompt(queries, location, remote))
            payload = parse_embedded_json(text)
        except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
            logger.warning("job_synthesis_ai_failed model=%s queries=%s: %s", model, len(queries), exc)
            return self.fallback(queries, location, remote)

        raw_jobs = coerce_job_objects(payload)
        if not raw_jobs:
            logger.info("job_synthesis_fallback reason=empty_ai_result model=%s", model)
            return self.fallback(queries, location, remote)

        postings = self.assemble(raw_jobs, queries, location, remote)
        if not postings:
            logger.info("job_synthesis_fallback reason=no_usable_postings model=%s", model)
            return self.fallback(queries, location, remote)
        logger.info("job_synthesis_ai_ok model=%s postings=%s", model, len(postings))
        return postings
