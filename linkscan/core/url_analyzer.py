import re
import random
import logging
from typing import List, NamedTuple
from urllib.parse import SplitResult, unquote, urlsplit

from linkscan.schemas import AnalysisResult, FactorIcon, RiskFactor, RiskLevel, Severity

logger = logging.getLogger(__name__)

# ============================================================================
# REFERENCE DATA
# ============================================================================

# Well-known sites that skip every other check
TRUSTED_DOMAINS = (
    'google.com', 'youtube.com', 'facebook.com', 'amazon.com',
    'microsoft.com', 'apple.com', 'github.com', 'stackoverflow.com',
    'wikipedia.org', 'linkedin.com', 'twitter.com', 'instagram.com',
)

URL_SHORTENERS = (
    'bit.ly', 'tinyurl.com', 't.co', 'goo.gl', 'ow.ly', 'is.gd',
    'buff.ly', 'adf.ly', 'j.mp', 'rb.gy', 'short.io', 'cutt.ly',
)

# Order matters: the factor label lists the first three matches
SUSPICIOUS_KEYWORDS = (
    'login', 'verify', 'update', 'confirm', 'account', 'secure',
    'banking', 'password', 'credential', 'suspend', 'urgent',
    'reward', 'winner', 'prize', 'free', 'gift', 'claim',
    'limited', 'expire', 'alert', 'warning', 'immediately',
)

PHISHING_PATTERNS = (
    re.compile(r'paypal.*login', re.IGNORECASE),
    re.compile(r'bank.*verify', re.IGNORECASE),
    re.compile(r'account.*suspend', re.IGNORECASE),
    re.compile(r'secure.*update', re.IGNORECASE),
    re.compile(r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}'),  # IP address in URL
    re.compile(r'@.*@'),  # Multiple @ symbols
    re.compile(r'[a-z0-9]+-[a-z0-9]+-[a-z0-9]+\.', re.IGNORECASE),  # Multiple hyphens in subdomain
)

NON_ASCII_PATTERN = re.compile(r'[^\x00-\x7F]')

# Code points a browser refuses in a decoded host
FORBIDDEN_HOST_CHARS = re.compile(r'[\x00-\x20#%/:<>?@\[\\\]^|]')

# ============================================================================
# SCORING
# ============================================================================

TRUSTED_SCORE = 5
NO_HTTPS_SCORE = 25
SHORTENER_SCORE = 20
KEYWORD_SCORE = 10
KEYWORD_SCORE_CAP = 30
PHISHING_PATTERN_SCORE = 35
SUBDOMAIN_SCORE = 15
UNUSUAL_CHARS_SCORE = 25
NEW_DOMAIN_SCORE = 15

MAX_DOMAIN_PARTS = 4
MAX_REPORTED_SCORE = 100
NEW_DOMAIN_PROBABILITY = 0.3

SAFE_THRESHOLD = 20
SUSPICIOUS_THRESHOLD = 50

SAFE_RECOMMENDATION = 'This link shows no common threat patterns. Safe to visit.'

VERDICT_TEXT = {
    RiskLevel.SAFE: (
        'This link appears to be safe based on our analysis.',
        SAFE_RECOMMENDATION,
    ),
    RiskLevel.SUSPICIOUS: (
        'This link has some characteristics that warrant caution.',
        'This link shows patterns often used in scams. Proceed carefully and verify the source.',
    ),
    RiskLevel.DANGEROUS: (
        'This link shows multiple high-risk indicators.',
        'High risk detected. We strongly recommend avoiding this link.',
    ),
}


class DomainAge(NamedTuple):
    is_new: bool
    age: str


def normalize_url(url: str) -> str:
    """Strip whitespace and default to https:// when no web scheme is given"""
    url = url.strip()
    if not url.startswith('http://') and not url.startswith('https://'):
        url = 'https://' + url
    return url


def split_web_url(url: str) -> SplitResult:
    """urlsplit for http(s) URLs, where browsers read a backslash as a path separator"""
    return urlsplit(url.replace('\\', '/'))


def _normalize_hostname(hostname: str) -> str:
    """Percent-decode and IDNA-encode a hostname the way browsers do"""
    hostname = unquote(hostname)
    if FORBIDDEN_HOST_CHARS.search(hostname):
        raise ValueError(f"Forbidden character in host {hostname!r}")
    try:
        return hostname.encode('idna').decode('ascii').lower()
    except UnicodeError:
        # Labels the IDNA codec rejects (empty, over 63 chars) stay as typed
        return hostname.lower()


def extract_domain(url: str) -> str:
    """
    Lower-cased hostname of the URL, as a browser would resolve it.

    Falls back to the whole lower-cased string when the URL cannot be
    parsed, so the keyword and pattern checks still have something to scan.
    """
    try:
        parts = split_web_url(url)
        parts.port  # raises ValueError on a malformed port
        hostname = parts.hostname
        if hostname and ':' not in hostname:  # IPv6 literals pass through
            hostname = _normalize_hostname(hostname)
    except ValueError as e:
        logger.debug(f"Unparseable URL {url!r}: {e}")
        return url.lower()

    if not hostname:
        logger.debug(f"No hostname in {url!r}, scanning raw string")
        return url.lower()
    return hostname


def score_to_level(score: int) -> RiskLevel:
    if score <= SAFE_THRESHOLD:
        return RiskLevel.SAFE
    elif score <= SUSPICIOUS_THRESHOLD:
        return RiskLevel.SUSPICIOUS
    return RiskLevel.DANGEROUS


class UrlAnalyzer:
    def __init__(self, rng=None, new_domain_probability: float = NEW_DOMAIN_PROBABILITY):
        """
        Heuristic URL risk classifier

        Args:
            rng: Source of the domain-age draw, anything with a random() -> float
                method. Defaults to the global `random` module.
            new_domain_probability: Chance that a domain is reported as new
        """
        self.rng = rng if rng is not None else random
        self.new_domain_probability = new_domain_probability

    def _is_https(self, url: str) -> bool:
        return url.lower().startswith('https://')

    def _is_url_shortener(self, domain: str) -> bool:
        return any(shortener in domain for shortener in URL_SHORTENERS)

    def _is_trusted_domain(self, domain: str) -> bool:
        return any(
            domain == trusted or domain.endswith('.' + trusted)
            for trusted in TRUSTED_DOMAINS
        )

    def _find_suspicious_keywords(self, url: str) -> List[str]:
        url_lower = url.lower()
        return [keyword for keyword in SUSPICIOUS_KEYWORDS if keyword in url_lower]

    def _matches_phishing_pattern(self, url: str) -> bool:
        return any(pattern.search(url) for pattern in PHISHING_PATTERNS)

    def _has_excessive_subdomains(self, domain: str) -> bool:
        return len(domain.split('.')) > MAX_DOMAIN_PARTS

    def _has_unusual_characters(self, url: str) -> bool:
        # Lookalike unicode or an encoded null byte
        return bool(NON_ASCII_PATTERN.search(url)) or '%00' in url

    def simulate_domain_age(self) -> DomainAge:
        # No WHOIS lookup; the age is drawn from the injected source
        if self.rng.random() < self.new_domain_probability:
            return DomainAge(is_new=True, age='Less than 30 days')
        return DomainAge(is_new=False, age='Over 1 year')

    def analyze(self, input_url: str) -> AnalysisResult:
        """Score a URL and bucket it into a risk level. Never raises."""
        url = normalize_url(input_url)
        domain = extract_domain(url)

        # --- EARLY EXIT: Whitelist Check ---
        if self._is_trusted_domain(domain):
            return AnalysisResult(
                risk_score=TRUSTED_SCORE,
                risk_level=RiskLevel.SAFE,
                explanation='This is a well-known, trusted website.',
                risk_factors=(
                    RiskFactor(icon=FactorIcon.SHIELD, label='Verified trusted domain', severity=Severity.LOW),
                ),
                recommendation=SAFE_RECOMMENDATION,
            )

        score = 0
        factors = []

        # 1. Transport
        if not self._is_https(url):
            score += NO_HTTPS_SCORE
            factors.append(RiskFactor(icon=FactorIcon.SHIELD_OFF, label='No HTTPS encryption', severity=Severity.HIGH))
        else:
            factors.append(RiskFactor(icon=FactorIcon.LOCK, label='HTTPS secured', severity=Severity.LOW))

        # 2. URL shortener
        if self._is_url_shortener(domain):
            score += SHORTENER_SCORE
            factors.append(RiskFactor(icon=FactorIcon.LINK, label='URL shortener detected', severity=Severity.MEDIUM))

        # 3. Suspicious keywords
        keywords = self._find_suspicious_keywords(url)
        if keywords:
            score += min(len(keywords) * KEYWORD_SCORE, KEYWORD_SCORE_CAP)
            factors.append(RiskFactor(
                icon=FactorIcon.ALERT_TRIANGLE,
                label=f"Suspicious keywords: {', '.join(keywords[:3])}",
                severity=Severity.HIGH if len(keywords) > 2 else Severity.MEDIUM,
            ))

        # 4. Known phishing shapes
        if self._matches_phishing_pattern(url):
            score += PHISHING_PATTERN_SCORE
            factors.append(RiskFactor(icon=FactorIcon.SKULL, label='Matches known phishing patterns', severity=Severity.HIGH))

        # 5. Subdomain depth
        if self._has_excessive_subdomains(domain):
            score += SUBDOMAIN_SCORE
            factors.append(RiskFactor(icon=FactorIcon.GIT_BRANCH, label='Unusual subdomain structure', severity=Severity.MEDIUM))

        # 6. Unusual characters
        if self._has_unusual_characters(url):
            score += UNUSUAL_CHARS_SCORE
            factors.append(RiskFactor(icon=FactorIcon.TYPE, label='Unusual characters detected', severity=Severity.HIGH))

        # 7. Domain age (simulated)
        if self.simulate_domain_age().is_new:
            score += NEW_DOMAIN_SCORE
            factors.append(RiskFactor(icon=FactorIcon.CLOCK, label='Recently registered domain', severity=Severity.MEDIUM))

        # Bucket on the raw sum, clamp only what gets reported
        level = score_to_level(score)
        explanation, recommendation = VERDICT_TEXT[level]

        return AnalysisResult(
            risk_score=max(0, min(score, MAX_REPORTED_SCORE)),
            risk_level=level,
            explanation=explanation,
            risk_factors=tuple(factors),
            recommendation=recommendation,
        )


def analyze(input_url: str, rng=None) -> AnalysisResult:
    """Convenience wrapper around a default `UrlAnalyzer`"""
    return UrlAnalyzer(rng=rng).analyze(input_url)
