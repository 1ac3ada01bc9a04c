from .models.fields import Fields

# =====================================================================================
# PRE-BUILT SELECTORS FOR COMMON FIELDS
# Meta selectors come first; page selectors are fallbacks for sites without them.
# =====================================================================================

TITLE_SELECTORS = [
    {"expr": "og:title", "source": "meta"},
    {"expr": "twitter:title", "source": "meta"},
    ".entry-title",
    ".article-title",
    ".post-title",
    "h1",
]

AUTHOR_SELECTORS = [
    {"expr": "author", "source": "meta"},
    {"expr": "article:author", "source": "meta"},
    "[rel='author']",
    ".author-name",
    ".byline .author",
]

PUBLISHED_DATE_SELECTORS = [
    {"expr": "article:published_time", "source": "meta"},
    {"expr": "time[datetime]", "attribute": "datetime"},
]

# ISO 8601 variants as written by common publishing platforms
ISO_DATE_PATTERNS = [
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
]

BODY_SELECTORS = [
    {"expr": ".entry-content", "exclude": ["div.sharedaddy", "div.jp-relatedposts"]},
    {"expr": ".article-body"},
    {"expr": "article"},
]

IMAGE_SELECTORS = [
    {"expr": "og:image", "source": "meta"},
    {"expr": "twitter:image", "source": "meta"},
    "article img",
]

URL_SELECTORS = [
    {"expr": "og:url", "source": "meta"},
    {"expr": "link[rel='canonical']", "attribute": "href"},
]

# Text that ends an article body
BODY_FILTERS = [
    {"expr": "(?i)(?:related|recommended) (?:posts|articles|reading).*", "scope": "body", "stop": True},
    {"expr": "(?i)share this:?", "scope": "all"},
    {"expr": "(?i)advertisement", "scope": "all"},
]

# =====================================================================================
# PRESET RULE SETS
# =====================================================================================

# A generic, fallback rule set that tries common meta tags and selectors.
GENERIC_FIELDS = Fields.from_dict(
    {
        "title": {"selectors": TITLE_SELECTORS, "filter": {"expr": "(?i)advertisement.*", "stop": True}},
        "author": {"selectors": AUTHOR_SELECTORS, "optional": True},
        "published-date": {
            "selectors": PUBLISHED_DATE_SELECTORS,
            "date-patterns": ISO_DATE_PATTERNS,
            "optional": True,
        },
        "body": {"selectors": BODY_SELECTORS, "filters": BODY_FILTERS},
        "image": {"selectors": IMAGE_SELECTORS, "optional": True},
        "url": {"selectors": URL_SELECTORS, "optional": True},
    }
)

# A rule set tuned for WordPress sites, derived from the generic one.
WORDPRESS_FIELDS = GENERIC_FIELDS.derive(
    root={"expr": "article.post, article.type-post, main"},
    validator={"selector": ".entry-title, .post-title"},
    author={"selectors": [".author.vcard a", ".author-name"] + AUTHOR_SELECTORS, "optional": True},
    author_link={"selector": {"expr": ".author.vcard a", "attribute": "href"}, "optional": True},
)
