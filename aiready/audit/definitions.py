"""Static issue catalog.

Every code a rule can emit is defined here once: its category, severity,
nominal score impact, copy and effort estimate. The catalog and the data
key table are read-only; callers that need a different catalog pass their
own mapping to the functions that accept ``definitions=``.
"""
from __future__ import annotations

from types import MappingProxyType

from aiready.audit.base import EffortLevel, IssueCategory, IssueDefinition, IssueSeverity

TECH = IssueCategory.TECHNICAL
CONTENT = IssueCategory.CONTENT
AI = IssueCategory.AI_READINESS
PERF = IssueCategory.PERFORMANCE

CRITICAL = IssueSeverity.CRITICAL
WARNING = IssueSeverity.WARNING
INFO = IssueSeverity.INFO

LOW = EffortLevel.LOW
MEDIUM = EffortLevel.MEDIUM
HIGH = EffortLevel.HIGH

FAQ_SNIPPET = """<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "FAQPage",
  "mainEntity": [{
    "@type": "Question",
    "name": "What is...?",
    "acceptedAnswer": { "@type": "Answer", "text": "..." }
  }]
}
</script>"""

_DEFINITIONS = [
    # --- Technical ---
    IssueDefinition(
        code="MISSING_TITLE",
        category=TECH,
        severity=CRITICAL,
        score_impact=-15,
        message="Page is missing a title tag",
        recommendation=(
            "Add a unique, descriptive title tag between 30-60 characters "
            "that includes the page's primary topic."
        ),
        effort_level=LOW,
        implementation_snippet="<title>Your Page Topic | Brand Name</title>",
    ),
    IssueDefinition(
        code="TITLE_LENGTH",
        category=TECH,
        severity=WARNING,
        score_impact=-5,
        message="Title tag is outside the recommended 30-60 characters",
        recommendation=(
            "Rewrite the title to 30-60 characters so it is not truncated "
            "and still names the page's primary topic."
        ),
        effort_level=LOW,
    ),
    IssueDefinition(
        code="MISSING_META_DESC",
        category=TECH,
        severity=WARNING,
        score_impact=-10,
        message="Page is missing a meta description",
        recommendation=(
            "Add a meta description of 120-160 characters that summarizes "
            "this page's key topic."
        ),
        effort_level=LOW,
        implementation_snippet=(
            '<meta name="description" content="A concise summary of this '
            "page's content in 120-160 characters.\" />"
        ),
    ),
    IssueDefinition(
        code="META_DESC_LENGTH",
        category=TECH,
        severity=INFO,
        score_impact=-3,
        message="Meta description is outside the recommended 120-160 characters",
        recommendation="Adjust the meta description to 120-160 characters.",
        effort_level=LOW,
    ),
    IssueDefinition(
        code="MISSING_H1",
        category=TECH,
        severity=WARNING,
        score_impact=-8,
        message="Page is missing an H1 heading",
        recommendation="Add exactly one H1 heading that clearly describes the page's main topic.",
        effort_level=LOW,
        implementation_snippet="<h1>Your Page's Main Topic</h1>",
    ),
    IssueDefinition(
        code="MULTIPLE_H1",
        category=TECH,
        severity=WARNING,
        score_impact=-5,
        message="Page has multiple H1 headings",
        recommendation="Reduce to a single H1 heading. Convert additional H1s to H2 or lower.",
        effort_level=LOW,
        implementation_snippet="<!-- Change extra <h1> tags to <h2> -->\n<h2>Secondary Section Title</h2>",
    ),
    IssueDefinition(
        code="HEADING_HIERARCHY",
        category=TECH,
        severity=INFO,
        score_impact=-3,
        message="Heading hierarchy has skipped levels (e.g., H1 to H3 without H2)",
        recommendation="Ensure headings follow a logical hierarchy: H1 > H2 > H3 without skipping levels.",
        effort_level=LOW,
    ),
    IssueDefinition(
        code="HTTP_STATUS",
        category=TECH,
        severity=CRITICAL,
        score_impact=-25,
        message="Page returned a 4xx or 5xx HTTP status code",
        recommendation="Fix the server error or redirect. Pages must return 200 status to be indexed.",
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="NOINDEX_SET",
        category=TECH,
        severity=CRITICAL,
        score_impact=-20,
        message="Page has a noindex robots directive",
        recommendation=(
            "Remove the noindex directive if this page should be discoverable "
            "by AI search engines."
        ),
        effort_level=LOW,
        implementation_snippet='<!-- Remove this tag: -->\n<!-- <meta name="robots" content="noindex"> -->',
    ),
    IssueDefinition(
        code="MISSING_CANONICAL",
        category=TECH,
        severity=WARNING,
        score_impact=-8,
        message="Page is missing a canonical URL tag",
        recommendation="Add a canonical tag pointing to the preferred URL for this page.",
        effort_level=LOW,
        implementation_snippet='<link rel="canonical" href="https://example.com/preferred-url" />',
    ),
    IssueDefinition(
        code="MISSING_ALT_TEXT",
        category=TECH,
        severity=WARNING,
        score_impact=-3,
        max_impact=15,
        message="Images are missing alt text attributes",
        recommendation=(
            "Add descriptive alt text to all images to improve accessibility "
            "and AI understanding."
        ),
        effort_level=LOW,
        implementation_snippet='<img src="photo.jpg" alt="Descriptive text about the image content" />',
    ),
    IssueDefinition(
        code="MISSING_OG_TAGS",
        category=TECH,
        severity=INFO,
        score_impact=-5,
        message="Page is missing Open Graph tags (og:title, og:description, og:image)",
        recommendation=(
            "Add og:title, og:description, and og:image meta tags for better "
            "social and AI sharing."
        ),
        effort_level=LOW,
        implementation_snippet=(
            '<meta property="og:title" content="Page Title" />\n'
            '<meta property="og:description" content="Page description" />\n'
            '<meta property="og:image" content="https://example.com/image.jpg" />'
        ),
    ),
    IssueDefinition(
        code="SLOW_RESPONSE",
        category=TECH,
        severity=WARNING,
        score_impact=-10,
        message="Server response time exceeds 2 seconds",
        recommendation=(
            "Optimize server response time to under 2 seconds. Check hosting, "
            "caching, and database queries."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="MISSING_SITEMAP",
        category=TECH,
        severity=INFO,
        score_impact=-5,
        message="No valid sitemap.xml found",
        recommendation="Create and submit a sitemap.xml to help crawlers discover all pages.",
        effort_level=MEDIUM,
        implementation_snippet=(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
            "  <url>\n    <loc>https://example.com/</loc>\n  </url>\n</urlset>"
        ),
    ),
    IssueDefinition(
        code="SITEMAP_INVALID_FORMAT",
        category=TECH,
        severity=WARNING,
        score_impact=-8,
        message="Sitemap XML is malformed or does not follow the sitemaps.org schema",
        recommendation="Fix sitemap.xml to follow the sitemaps.org/schemas/sitemap/0.9 standard.",
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="SITEMAP_STALE_URLS",
        category=TECH,
        severity=INFO,
        score_impact=-3,
        message="Sitemap contains URLs with lastmod dates older than 12 months",
        recommendation=(
            "Update <lastmod> dates in your sitemap to reflect when pages "
            "were actually last modified."
        ),
        effort_level=LOW,
    ),
    IssueDefinition(
        code="MISSING_LLMS_TXT",
        category=TECH,
        severity=WARNING,
        score_impact=-20,
        message="No llms.txt file found at /llms.txt",
        recommendation=(
            "Create an llms.txt file at /llms.txt to explicitly permit AI "
            "crawlers and provide structured metadata about your site."
        ),
        effort_level=LOW,
        implementation_snippet=(
            "# /llms.txt\n# Site: Example.com\n"
            "# Description: Brief description of your site\n"
            "# Topics: topic1, topic2\n\nAllow: *"
        ),
    ),
    # --- Content ---
    IssueDefinition(
        code="THIN_CONTENT",
        category=CONTENT,
        severity=CRITICAL,
        score_impact=-15,
        message="Page has insufficient content",
        recommendation="Expand content to at least 500 words of substantive, topic-relevant text.",
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="CONTENT_DEPTH",
        category=CONTENT,
        severity=WARNING,
        score_impact=0,
        max_impact=20,
        message="Content lacks depth and comprehensive topic coverage",
        recommendation=(
            "Expand coverage of subtopics, add supporting data, examples, "
            "and expert analysis."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="CONTENT_CLARITY",
        category=CONTENT,
        severity=WARNING,
        score_impact=0,
        max_impact=20,
        message="Content readability and structure need improvement",
        recommendation=(
            "Improve clarity with shorter paragraphs, subheadings, bullet "
            "points, and plain language."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="CONTENT_AUTHORITY",
        category=CONTENT,
        severity=WARNING,
        score_impact=0,
        max_impact=20,
        message="Content lacks authority signals (citations, data, expert language)",
        recommendation=(
            "Add citations, statistics, expert quotes, and authoritative "
            "sources to build credibility."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="DUPLICATE_CONTENT",
        category=CONTENT,
        severity=WARNING,
        score_impact=-15,
        message="Page content is a duplicate of another page in this project",
        recommendation="Consolidate duplicate pages using canonical tags or merge the content.",
        effort_level=MEDIUM,
        implementation_snippet='<link rel="canonical" href="https://example.com/original-page" />',
    ),
    IssueDefinition(
        code="STALE_CONTENT",
        category=CONTENT,
        severity=INFO,
        score_impact=-5,
        message="Content appears to be over 12 months old without updates",
        recommendation=(
            "Update content with current information, statistics, and "
            "recent developments."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="NO_INTERNAL_LINKS",
        category=CONTENT,
        severity=WARNING,
        score_impact=-8,
        message="Page has fewer than 2 internal links to relevant content",
        recommendation="Add at least 2-3 internal links to related pages to improve discoverability.",
        effort_level=LOW,
        implementation_snippet='<a href="/related-topic">Learn more about related topic</a>',
    ),
    IssueDefinition(
        code="EXCESSIVE_LINKS",
        category=CONTENT,
        severity=INFO,
        score_impact=-3,
        message="External links exceed internal links by more than 3:1 ratio",
        recommendation=(
            "Balance your link profile by adding more internal links "
            "relative to external ones."
        ),
        effort_level=LOW,
    ),
    IssueDefinition(
        code="MISSING_FAQ_STRUCTURE",
        category=CONTENT,
        severity=INFO,
        score_impact=-5,
        message="Content addressing questions does not use Q&A format",
        recommendation=(
            "Structure common questions using FAQ format with clear question "
            "headings and concise answers."
        ),
        effort_level=MEDIUM,
        implementation_snippet=FAQ_SNIPPET,
    ),
    IssueDefinition(
        code="POOR_READABILITY",
        category=CONTENT,
        severity=WARNING,
        score_impact=-10,
        message="Content readability is below recommended level (Flesch score < 50)",
        recommendation=(
            "Simplify language: use shorter sentences, common words, and "
            "active voice. Target Flesch score of 60+."
        ),
        effort_level=MEDIUM,
    ),
    # --- AI readiness ---
    IssueDefinition(
        code="AI_CRAWLER_BLOCKED",
        category=AI,
        severity=CRITICAL,
        score_impact=-25,
        message="robots.txt blocks one or more AI crawlers (GPTBot, ClaudeBot, PerplexityBot)",
        recommendation=(
            "Remove Disallow rules for AI user agents (GPTBot, ClaudeBot, "
            "PerplexityBot) in robots.txt."
        ),
        effort_level=LOW,
        implementation_snippet=(
            "# robots.txt: allow AI crawlers\nUser-agent: GPTBot\nAllow: /\n\n"
            "User-agent: ClaudeBot\nAllow: /\n\n"
            "User-agent: PerplexityBot\nAllow: /"
        ),
    ),
    IssueDefinition(
        code="NO_STRUCTURED_DATA",
        category=AI,
        severity=WARNING,
        score_impact=-15,
        message="Page has no JSON-LD structured data",
        recommendation=(
            "Add JSON-LD structured data (at minimum: Organization, WebPage, "
            "and Article/FAQPage as appropriate)."
        ),
        effort_level=MEDIUM,
        implementation_snippet=(
            '<script type="application/ld+json">\n{\n'
            '  "@context": "https://schema.org",\n  "@type": "WebPage",\n'
            '  "name": "Page Title",\n  "description": "Page description"\n}\n</script>'
        ),
    ),
    IssueDefinition(
        code="INCOMPLETE_SCHEMA",
        category=AI,
        severity=WARNING,
        score_impact=-8,
        message="Structured data is present but missing required properties",
        recommendation="Complete all required properties in your JSON-LD schema markup.",
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="INVALID_SCHEMA",
        category=AI,
        severity=WARNING,
        score_impact=-8,
        message="JSON-LD structured data contains parse errors",
        recommendation="Fix JSON-LD syntax errors. Validate at schema.org or Google Rich Results Test.",
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="CITATION_WORTHINESS",
        category=AI,
        severity=WARNING,
        score_impact=0,
        max_impact=20,
        message="Content has low citation worthiness for AI assistants",
        recommendation=(
            "Add unique data, original research, clear definitions, and "
            "expert analysis that AI would want to cite."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="NO_DIRECT_ANSWERS",
        category=AI,
        severity=WARNING,
        score_impact=-10,
        message="Content does not contain direct, concise answers to likely queries",
        recommendation=(
            "Add clear, concise answer paragraphs at the top of sections that "
            "directly address likely user questions."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="MISSING_ENTITY_MARKUP",
        category=AI,
        severity=INFO,
        score_impact=-5,
        message="Key named entities are not marked up in schema",
        recommendation=(
            "Add schema markup for key entities (people, organizations, "
            "products) mentioned in your content."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="NO_SUMMARY_SECTION",
        category=AI,
        severity=INFO,
        score_impact=-5,
        message="Page lacks a summary or key takeaway section",
        recommendation="Add a TL;DR or key takeaways section that summarizes the page's main points.",
        effort_level=LOW,
        implementation_snippet=(
            "<h2>Key Takeaways</h2>\n<ul>\n  <li>First main point</li>\n"
            "  <li>Second main point</li>\n  <li>Third main point</li>\n</ul>"
        ),
    ),
    IssueDefinition(
        code="POOR_QUESTION_COVERAGE",
        category=AI,
        severity=WARNING,
        score_impact=-10,
        message="Content does not adequately address likely search queries for this topic",
        recommendation=(
            "Research common questions about this topic and ensure your "
            "content addresses them directly."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="MISSING_AUTHORITATIVE_CITATIONS",
        category=AI,
        severity=INFO,
        score_impact=-5,
        message="Page lacks links to high-authority external sources (.gov, .edu, or major media)",
        recommendation=(
            "Cite and link to authoritative external sources to verify your "
            "claims so AI assistants can validate your content's accuracy."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="PDF_ONLY_CONTENT",
        category=AI,
        severity=WARNING,
        score_impact=-5,
        message="Page appears to primarily link to PDF content without HTML alternatives",
        recommendation=(
            "Create HTML versions of important PDF content. AI models struggle "
            "to extract and cite PDF content compared to well-structured HTML."
        ),
        effort_level=HIGH,
    ),
    # --- Performance ---
    IssueDefinition(
        code="LH_PERF_LOW",
        category=PERF,
        severity=WARNING,
        score_impact=-20,
        message="Lighthouse Performance score is below threshold",
        recommendation=(
            "Improve page performance: optimize images, reduce JavaScript, "
            "enable caching, minimize render-blocking resources."
        ),
        effort_level=HIGH,
    ),
    IssueDefinition(
        code="LH_SEO_LOW",
        category=PERF,
        severity=WARNING,
        score_impact=-15,
        message="Lighthouse SEO score is below 0.8",
        recommendation=(
            "Address Lighthouse SEO audit failures: ensure crawlable links, "
            "valid hreflang, proper meta tags."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="LH_A11Y_LOW",
        category=PERF,
        severity=INFO,
        score_impact=-5,
        message="Lighthouse Accessibility score is below 0.7",
        recommendation=(
            "Improve accessibility: add alt text, ensure color contrast, use "
            "semantic HTML, add ARIA labels."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="LH_BP_LOW",
        category=PERF,
        severity=INFO,
        score_impact=-5,
        message="Lighthouse Best Practices score is below 0.8",
        recommendation=(
            "Address Lighthouse best practice issues: use HTTPS, avoid "
            "deprecated APIs, fix console errors."
        ),
        effort_level=MEDIUM,
    ),
    IssueDefinition(
        code="LARGE_PAGE_SIZE",
        category=PERF,
        severity=WARNING,
        score_impact=-10,
        message="Total page size exceeds 3MB",
        recommendation=(
            "Reduce page weight below 3MB: compress images, minify CSS/JS, "
            "lazy-load below-the-fold content."
        ),
        effort_level=HIGH,
    ),
]

ISSUE_DEFINITIONS: MappingProxyType[str, IssueDefinition] = MappingProxyType(
    {definition.code: definition for definition in _DEFINITIONS}
)

# Keys each code may put in ``Issue.data``. Codes not listed carry no data.
ISSUE_DATA_KEYS: MappingProxyType[str, frozenset[str]] = MappingProxyType({
    "TITLE_LENGTH": frozenset({"title_length"}),
    "META_DESC_LENGTH": frozenset({"description_length"}),
    "MULTIPLE_H1": frozenset({"h1_count"}),
    "HEADING_HIERARCHY": frozenset({"skipped_from", "skipped_to"}),
    "HTTP_STATUS": frozenset({"status_code"}),
    "MISSING_ALT_TEXT": frozenset({"images_without_alt"}),
    "MISSING_OG_TAGS": frozenset({"missing_tags"}),
    "SLOW_RESPONSE": frozenset({"response_time_ms"}),
    "SITEMAP_STALE_URLS": frozenset({"stale_urls"}),
    "THIN_CONTENT": frozenset({"word_count"}),
    "CONTENT_DEPTH": frozenset({"llm_score"}),
    "CONTENT_CLARITY": frozenset({"llm_score"}),
    "CONTENT_AUTHORITY": frozenset({"llm_score"}),
    "DUPLICATE_CONTENT": frozenset({"duplicate_of"}),
    "NO_INTERNAL_LINKS": frozenset({"internal_link_count"}),
    "EXCESSIVE_LINKS": frozenset({"internal_count", "external_count"}),
    "POOR_READABILITY": frozenset({"flesch_score"}),
    "AI_CRAWLER_BLOCKED": frozenset({"blocked_crawlers"}),
    "INCOMPLETE_SCHEMA": frozenset({"schema_type", "missing_props"}),
    "CITATION_WORTHINESS": frozenset({"llm_score"}),
    "POOR_QUESTION_COVERAGE": frozenset({"structure_score"}),
    "PDF_ONLY_CONTENT": frozenset({"pdf_count", "word_count"}),
    "LH_PERF_LOW": frozenset({"performance"}),
    "LH_SEO_LOW": frozenset({"seo"}),
    "LH_A11Y_LOW": frozenset({"accessibility"}),
    "LH_BP_LOW": frozenset({"best_practices"}),
    "LARGE_PAGE_SIZE": frozenset({"page_size_bytes"}),
})
