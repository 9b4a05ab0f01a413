from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlencode

from app.core.hashing import pick_index

UrlBuilder = Callable[[str, Optional[str], Optional[str], bool], str]


@dataclass(frozen=True)
class SearchProvider:
    name: str
    label: str
    hostnames: tuple[str, ...]
    build_url: UrlBuilder

    def matches_host(self, hostname: str) -> bool:
        host = (hostname or "").strip().lower().rstrip(".")
        if not host:
            return False
        return any(host == known or host.endswith(f".{known}") for known in self.hostnames)


def _keywords(query: str, company: str | None, remote: bool) -> str:
    parts = [query.strip(), (company or "").strip(), "remote" if remote else ""]
    return " ".join(part for part in parts if part)


def _location(location: str | None) -> str:
    return (location or "").strip()


def _search_url(base: str, params: dict[str, str]) -> str:
    clean = {key: value for key, value in params.items() if value}
    return f"{base}?{urlencode(clean)}" if clean else base


def _linkedin_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"keywords": _keywords(query, company, remote), "location": _location(location)}
    if remote:
        params["f_WT"] = "2"
    return _search_url("https://www.linkedin.com/jobs/search/", params)


def _indeed_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"q": _keywords(query, company, False), "l": _location(location) or ("Remote" if remote else "")}
    return _search_url("https://www.indeed.com/jobs", params)


def _glassdoor_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"sc.keyword": _keywords(query, company, remote), "locKeyword": _location(location)}
    return _search_url("https://www.glassdoor.com/Job/jobs.htm", params)


def _jobstreet_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"keywords": _keywords(query, company, remote), "where": _location(location)}
    return _search_url("https://www.jobstreet.com/jobs", params)


def _prosple_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"keywords": _keywords(query, company, remote), "locations": _location(location)}
    return _search_url("https://au.prosple.com/search-jobs", params)


def _seek_url(query: str, company: str | None, location: str | None, remote: bool) -> str:
    params = {"keywords": _keywords(query, company, False), "where": _location(location)}
    if remote:
        params["workarrangement"] = "2"
    return _search_url("https://www.seek.com.au/jobs", params)


PROVIDERS: tuple[SearchProvider, ...] = (
    SearchProvider("LinkedIn", "LinkedIn Jobs", ("linkedin.com",), _linkedin_url),
    SearchProvider("Indeed", "Indeed", ("indeed.com", "indeed.co.uk", "indeed.com.au", "indeed.ca"), _indeed_url),
    SearchProvider("Glassdoor", "Glassdoor", ("glassdoor.com", "glassdoor.co.uk", "glassdoor.com.au"), _glassdoor_url),
    SearchProvider(
        "JobStreet",
        "JobStreet",
        ("jobstreet.com", "jobstreet.com.my", "jobstreet.com.sg", "jobstreet.com.ph", "jobstreet.co.id"),
        _jobstreet_url,
    ),
    SearchProvider("Prosple", "Prosple", ("prosple.com",), _prosple_url),
    SearchProvider("Seek", "SEEK", ("seek.com.au", "seek.co.nz"), _seek_url),
)


def select_provider(seed: int, providers: tuple[SearchProvider, ...] = PROVIDERS) -> SearchProvider:
    return providers[pick_index(seed, len(providers))]


def find_provider_for_host(
    hostname: str, providers: tuple[SearchProvider, ...] = PROVIDERS
) -> SearchProvider | None:
    for provider in providers:
        if provider.matches_host(hostname):
            return provider
    return None
