import logging

from content_fields import WORDPRESS_FIELDS, Fields, FieldsParser

# Configure logging to see which fields are missing or stopped
logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

HTML = """
<html>
<head>
    <meta property="og:title" content="Release notes for 2.0">
    <meta property="article:published_time" content="2024-03-01T08:30:00+00:00">
</head>
<body>
    <main>
        <article class="post">
            <h1 class="entry-title">Release notes for 2.0</h1>
            <span class="author vcard"><a href="/author/sam/">Sam Lee</a></span>
            <div class="entry-content">
                <p>Version 2.0 is out.</p>
                <p>It brings faster parsing.</p>
                <h3>Related posts</h3>
                <p>Version 1.9 notes</p>
            </div>
        </article>
    </main>
</body>
</html>
"""


def main():
    """
    An example showing how a site-level rule set is derived from a preset
    and evaluated against a page.
    """
    # 1. Derive the site rules from the WordPress preset.
    # Only the slots that differ are given; the preset is not modified.
    fields: Fields = WORDPRESS_FIELDS.derive(
        title={"selector": "h1.entry-title", "text-case": "upper"},
    )

    # 2. Evaluate the rules against the page.
    # The base URL is used to resolve relative links such as the author link.
    parser = FieldsParser(HTML, fields, base_url="https://blog.example.com/2024/03/release-notes/")
    result = parser.parse()

    if result.rejected:
        log.warning(f"Page rejected: {result.reason}")
        return

    for name, field in result.fields.items():
        print(f"  {name}: {field.status} {field.value!r}")

    # 3. A summary of the body, using the summary filters of the body field.
    print(f"  summary: {parser.parse_summary(min_length=20, max_length=200)!r}")

    # Date fields that could not be parsed surface as errors.
    result.raise_for_errors()


if __name__ == "__main__":
    main()
