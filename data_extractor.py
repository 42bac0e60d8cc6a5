"""
Heuristic field extraction for LinkedIn profile search results.

LinkedIn page titles look like "Name - Title at Company | LinkedIn"; the body
and highlight snippets add an Experience section now and then. Everything here
is best-effort: a rule that does not match leaves the previous value (or the
sentinel) in place.
"""
import logging
import re
from typing import Iterable, List, Optional

from models import NOT_SPECIFIED, UNKNOWN_NAME, Profile, SearchResult

BIO_PLACEHOLDER = "LinkedIn profile (bio not available)"

JOB_WORDS = [
    'engineer', 'manager', 'director', 'developer', 'designer',
    'scientist', 'analyst', 'lead', 'specialist', 'consultant',
    'architect', 'researcher', 'coordinator', 'associate', 'intern',
]

TITLE_SEPARATORS = [' @ ', ' at ', ' | ']

# LinkedIn login wall / UI text that leaks into snippets
JUNK_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in (
        r'sign in to view',
        r'join now',
        r'email or phone',
        r'forgot password',
        r'user agreement',
        r'privacy policy',
        r'cookie policy',
        r'new to linkedin',
        r'by clicking continue',
        r'view.*profile',
        r'connect with',
    )
]

_SUFFIX_RE = re.compile(r'\s*[|•]\s*(LinkedIn|Professional Profile).*$', re.IGNORECASE)
_EDGE_SYMBOLS_RE = re.compile(r'^[@|•\-\s]+|[@|•\-\s]+$')
_EXPERIENCE_PATTERNS = [
    re.compile(r'Experience[:\s\n]+([^\n•·\d]{5,80})[\n•·]', re.IGNORECASE),
    re.compile(r'Current[:\s]+([^\n•·\d]{5,80})[\n•·]', re.IGNORECASE),
]
_DURATION_RE = re.compile(r'\d+\s*(year|yr|month|mo|week|day)s?', re.IGNORECASE)
_YEAR_PREFIX_RE = re.compile(r'^\d{4}')
_MONTH_PREFIX_RE = re.compile(r'^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)', re.IGNORECASE)
# Case-sensitive on purpose: "First Last"
_BARE_NAME_RE = re.compile(r'^[A-Z][a-z]+\s+[A-Z][a-z]+$')
_SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')
_TITLE_BIO_RE = re.compile(r'-\s*(.+?)\s*\|')


def clean_extracted_text(text: str) -> str:
    """Strip markdown/HTML residue and stray "at"/"@" tokens, collapse whitespace."""
    if not text:
        return ''
    text = re.sub(r'^[#•·\-\s]+', '', text)
    text = re.sub(r'\[([^\]]+)\]', r'\1', text)
    text = re.sub(r'<[^>]+>', '', text)
    text = re.sub(r'\(Current\)', '', text, flags=re.IGNORECASE)
    text = re.sub(r'\(Full[- ]time\)', '', text, flags=re.IGNORECASE)
    text = re.sub(r'^(?:at|@)\s+', '', text, flags=re.IGNORECASE)
    text = re.sub(r'\s+(?:at|@)\s*$', '', text, flags=re.IGNORECASE)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def is_plausible_title(candidate: str) -> bool:
    """Reject durations ("3 years"), dates, bare "First Last" names and odd lengths."""
    if not 5 <= len(candidate) <= 80:
        return False
    if _DURATION_RE.search(candidate):
        return False
    if _YEAR_PREFIX_RE.match(candidate) or _MONTH_PREFIX_RE.match(candidate):
        return False
    if _BARE_NAME_RE.match(candidate):
        return False
    return True


def is_profile_url(url: Optional[str]) -> bool:
    """Only personal profile pages (/in/) qualify; job postings and company pages do not."""
    if not url:
        return False
    return '/in/' in url and '/jobs/' not in url and '/company/' not in url


def extract_bio(text: str, highlights: str, page_title: str) -> str:
    """First readable sentence of highlights + body, else the headline from the page title."""
    full_text = f"{highlights} {text}"

    for sentence in _SENTENCE_SPLIT_RE.split(full_text):
        sentence = sentence.strip()
        if len(sentence) < 20 or len(sentence) > 300:
            continue
        if any(p.search(sentence) for p in JUNK_PATTERNS):
            continue
        return clean_extracted_text(sentence)

    # "Name - Title at Company | LinkedIn"
    m = _TITLE_BIO_RE.search(page_title or '')
    if m and m.group(1):
        return clean_extracted_text(m.group(1))

    return BIO_PLACEHOLDER


class LinkedInProfileExtractor:
    """Turns search results into Profile records."""

    def __init__(self):
        self.extraction_stats = {
            'results_seen': 0,
            'non_profile_urls_skipped': 0,
            'profiles_extracted': 0,
            'titles_from_body': 0,
            'titles_from_target_company': 0,
        }

    def split_page_title(self, page_title: str):
        """Parse "Name - Title @ Company | LinkedIn" into (name, title, company)."""
        clean_title = _SUFFIX_RE.sub('', page_title or '').strip()

        name = UNKNOWN_NAME
        job_title = NOT_SPECIFIED
        company = NOT_SPECIFIED

        dash_index = clean_title.find(' - ')
        if dash_index == -1:
            return clean_title or UNKNOWN_NAME, job_title, company

        name = clean_title[:dash_index].strip()
        after_dash = clean_title[dash_index + 3:].strip()

        lowered = after_dash.lower()
        for sep in TITLE_SEPARATORS:
            idx = lowered.find(sep)
            if idx != -1:
                job_title = after_dash[:idx].strip()
                company = after_dash[idx + len(sep):].strip()
                break
        else:
            # Short phrase without a job word is most likely just the employer
            word_count = len(after_dash.split()) or 1
            has_job_word = any(word in lowered for word in JOB_WORDS)
            if word_count <= 3 and not has_job_word:
                company = after_dash
            else:
                job_title = after_dash

        name = ' '.join(name.split())
        job_title = _EDGE_SYMBOLS_RE.sub('', ' '.join(job_title.split())).strip()
        company = _EDGE_SYMBOLS_RE.sub('', ' '.join(company.split())).strip()
        return name, job_title, company

    def title_from_body(self, full_text: str) -> Optional[str]:
        for pattern in _EXPERIENCE_PATTERNS:
            m = pattern.search(full_text)
            if m and m.group(1):
                candidate = clean_extracted_text(m.group(1).strip())
                if is_plausible_title(candidate):
                    return candidate
        return None

    def title_at_company(self, full_text: str, target_company: str) -> Optional[str]:
        """Role phrase right before the target company, e.g. "Research Engineer at OpenAI"."""
        pattern = re.compile(
            r'([^\n•·]{5,80})[\s\n]+(?:at\s+)?' + re.escape(target_company),
            re.IGNORECASE,
        )
        m = pattern.search(full_text)
        if m and m.group(1):
            candidate = clean_extracted_text(m.group(1).strip())
            if is_plausible_title(candidate):
                return candidate
        return None

    def extract(self, result: SearchResult, target_company: str = '') -> Profile:
        """Build one Profile from a search result, using target_company as a hint."""
        text = result.text or ''
        highlights = result.highlight_text
        summary = extract_bio(text, highlights, result.title)

        name, job_title, company = self.split_page_title(result.title)

        if len(text) + len(highlights) > 50:
            body_title = self.title_from_body(f"{text} {highlights}")
            if body_title:
                job_title = body_title
                self.extraction_stats['titles_from_body'] += 1

        target_company = (target_company or '').strip()
        if target_company and (text or highlights):
            company_title = self.title_at_company(f"{text} {highlights}", target_company)
            if company_title:
                job_title = company_title
                company = target_company
                self.extraction_stats['titles_from_target_company'] += 1

        # Cleaning may empty a field; fall back to the sentinel rather than ""
        name = clean_extracted_text(name) or UNKNOWN_NAME
        job_title = clean_extracted_text(job_title) or NOT_SPECIFIED
        company = clean_extracted_text(company) or NOT_SPECIFIED

        self.extraction_stats['profiles_extracted'] += 1
        logging.debug(f"Extracted profile: {name} | {job_title} | {company}")

        return Profile(
            id=result.id,
            name=name,
            title=job_title,
            company=company,
            linkedin_url=result.url,
            summary=summary,
        )

    def extract_all(self, results: Iterable[SearchResult], target_company: str = '') -> List[Profile]:
        """Drop non-profile URLs, then extract every remaining result in order."""
        profiles = []
        for result in results:
            self.extraction_stats['results_seen'] += 1
            if not is_profile_url(result.url):
                logging.debug(f"Skipping non-profile URL: {result.url}")
                self.extraction_stats['non_profile_urls_skipped'] += 1
                continue
            profiles.append(self.extract(result, target_company))

        logging.info(f"Extraction completed. Profiles: {self.extraction_stats['profiles_extracted']}, "
                     f"Skipped URLs: {self.extraction_stats['non_profile_urls_skipped']}")
        return profiles

    def get_extraction_stats(self) -> dict:
        """Return extraction statistics."""
        return self.extraction_stats.copy()
