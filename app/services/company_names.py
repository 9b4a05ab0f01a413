from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from app.core.hashing import stable_hash
from app.schemas.jobs import JobQuery

GENERIC_COMPANY_PHRASES: tuple[str, ...] = (
    "various companies",
    "various employers",
    "multiple companies",
    "multiple employers",
    "confidential employer",
    "confidential company",
    "leading company",
    "leading organisation",
    "leading organization",
    "top company",
    "top companies",
    "hiring company",
    "ai recommendation",
    "ai curated",
    "explore curated opportunities",
    "see listing",
    "see job board",
    "company name",
)

GENERIC_COMPANY_EXACT = {"company", "employer", "organisation", "organization"}

_PLACEHOLDER_RE = re.compile(
    r"(?:^|\b)(?:n/a|n\.a\.|tbd|tba|not specified|not disclosed|undisclosed)(?:\b|$)",
    re.IGNORECASE,
)
# Placeholders only when they make up the whole name.
_PLACEHOLDER_NAME_RE = re.compile(r"(?:unknown|confidential|null|none)\W*", re.IGNORECASE)
_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class CompanyBucket:
    keywords: tuple[str, ...]
    companies: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


# Every bucket holds at least as many companies as the fallback emits per query,
# so one query never repeats a company.
COMPANY_BUCKETS: tuple[CompanyBucket, ...] = (
    CompanyBucket(
        ("data", "analytics", "machine learning", "ml ", "artificial intelligence", " ai ", "scientist"),
        ("Databricks", "Snowflake", "Atlassian", "Canva", "Spotify", "Airbnb", "NVIDIA", "Grab"),
    ),
    CompanyBucket(
        ("design", " ux", " ui ", "product designer", "creative"),
        ("Canva", "Figma", "Adobe", "Airbnb", "Spotify", "Miro", "Atlassian", "Shopify"),
    ),
    CompanyBucket(
        ("marketing", "growth", " seo", "content", "brand", "social media"),
        ("HubSpot", "Canva", "Shopify", "Mailchimp", "Semrush", "Airbnb", "Unilever", "Nestlé"),
    ),
    CompanyBucket(
        ("finance", "accounting", "accountant", "audit", "banking", "financial"),
        ("Deloitte", "PwC", "KPMG", "Ernst & Young", "Macquarie Group", "Commonwealth Bank", "DBS Bank", "Maybank"),
    ),
    CompanyBucket(
        ("sales", "account executive", "business development", "customer success"),
        ("Salesforce", "HubSpot", "Oracle", "SAP", "Zendesk", "Xero", "Atlassian", "Shopify"),
    ),
    CompanyBucket(
        ("nurse", "nursing", "clinical", "health", "medical", "pharma"),
        ("Ramsay Health Care", "Healthscope", "IHH Healthcare", "CSL", "Pfizer", "Roche", "Bupa", "Sonic Healthcare"),
    ),
    CompanyBucket(
        ("software", "developer", "engineer", "backend", "frontend", "full stack", "devops", "cloud"),
        ("Atlassian", "Canva", "Stripe", "Shopify", "GitLab", "Datadog", "Cloudflare", "Grab"),
    ),
)

DEFAULT_COMPANIES: tuple[str, ...] = (
    "Accenture",
    "Deloitte",
    "Google",
    "Microsoft",
    "Amazon",
    "IBM",
    "Atlassian",
    "Canva",
)

# Job boards and search engines: their URLs never name the hiring company.
AGGREGATOR_HOSTS: tuple[str, ...] = (
    "linkedin.com",
    "indeed.com",
    "glassdoor.com",
    "jobstreet.com",
    "prosple.com",
    "seek.com.au",
    "seek.co.nz",
    "wellfound.com",
    "angel.co",
    "ziprecruiter.com",
    "monster.com",
    "google.com",
    "simplyhired.com",
    "careerbuilder.com",
)

# Applicant-tracking systems that carry the company as the first path segment.
PATH_SEGMENT_HOSTS: tuple[str, ...] = (
    "boards.greenhouse.io",
    "job-boards.greenhouse.io",
    "jobs.lever.co",
    "jobs.ashbyhq.com",
    "apply.workable.com",
    "jobs.smartrecruiters.com",
    "careers.smartrecruiters.com",
)

# Careers-page builders that carry the company as the leftmost subdomain.
SUBDOMAIN_HOSTS: tuple[str, ...] = (
    "myworkdayjobs.com",
    "bamboohr.com",
    "recruitee.com",
    "breezy.hr",
    "teamtailor.com",
    "applytojob.com",
)

_IGNORED_SUBDOMAINS = {"www", "jobs", "careers", "apply", "app", "api"}


def slugify(value: str) -> str:
    return _SLUG_RE.sub("", (value or "").lower())


def is_generic_company_name(name: str | None) -> bool:
    candidate = (name or "").strip()
    if len(candidate) <= 2:
        return True
    lowered = candidate.lower()
    if lowered in GENERIC_COMPANY_EXACT:
        return True
    if any(phrase in lowered for phrase in GENERIC_COMPANY_PHRASES):
        return True
    return bool(_PLACEHOLDER_RE.search(lowered) or _PLACEHOLDER_NAME_RE.fullmatch(lowered))


def _host_matches(host: str, known: str) -> bool:
    return host == known or host.endswith(f".{known}")


def _humanize_slug(raw: str) -> str:
    words = [word for word in re.split(r"[-_.+\s]+", unquote(raw)) if word]
    return " ".join(word if word.isupper() else word.capitalize() for word in words)


def derive_company_from_link(link: str | None) -> str | None:
    """Read the employer name out of an applicant-tracking-system URL, if the host exposes one."""
    if not link:
        return None
    try:
        parsed = urlparse(link)
    except ValueError:
        return None
    host = (parsed.hostname or "").lower().rstrip(".")
    if not host:
        return None
    if any(_host_matches(host, aggregator) for aggregator in AGGREGATOR_HOSTS):
        return None

    raw: str | None = None
    if any(host == known for known in PATH_SEGMENT_HOSTS):
        segments = [segment for segment in parsed.path.split("/") if segment]
        if segments and segments[0].lower() not in {"embed", "jobs", "job_app"}:
            raw = segments[0]
    else:
        for known in SUBDOMAIN_HOSTS:
            if host.endswith(f".{known}"):
                labels = [label for label in host[: -len(known) - 1].split(".") if label]
                labels = [label for label in labels if label not in _IGNORED_SUBDOMAINS]
                # Workday hosts look like acme.wd5.myworkdayjobs.com.
                labels = [label for label in labels if not re.fullmatch(r"wd\d+", label)]
                if labels:
                    raw = labels[0]
                break

    if not raw:
        return None
    name = _humanize_slug(raw)
    if is_generic_company_name(name):
        return None
    return name


def sample_company(query: JobQuery, index: int) -> str:
    """Deterministically pick a plausible company for ``query``; ``index`` spreads picks apart."""
    text = f"{query.title} {query.query}".lower()
    pool = DEFAULT_COMPANIES
    for bucket in COMPANY_BUCKETS:
        if bucket.matches(f" {text} "):
            pool = bucket.companies
            break
    return pool[(stable_hash(text) + index) % len(pool)]


def normalise_company_name(raw_company: object, link: str | None, query: JobQuery, index: int) -> str:
    if isinstance(raw_company, str) and raw_company.strip() and not is_generic_company_name(raw_company):
        return raw_company.strip()
    derived = derive_company_from_link(link)
    if derived:
        return derived
    return sample_company(query, index)
