"""Lint rules for Markdown syntax trees."""
from ..models import LintRule
from . import blocks, definitions, document, headings, links, markers

# Registry of all available rules
RULES = {
    rule.name: rule
    for rule in [
        # Headings
        LintRule("no-heading-punctuation", headings.no_heading_punctuation,
                 headings.configure_heading_punctuation),
        LintRule("no-duplicate-headings", headings.no_duplicate_headings),
        LintRule("no-duplicate-headings-in-section", headings.no_duplicate_headings_in_section),
        LintRule("no-emphasis-as-heading", headings.no_emphasis_as_heading),
        LintRule("no-heading-like-paragraph", headings.no_heading_like_paragraph),

        # Definitions
        LintRule("no-duplicate-definitions", definitions.no_duplicate_definitions),
        LintRule("final-definition", definitions.final_definition),

        # Links and references
        LintRule("link-title-style", links.link_title_style, links.configure_link_title_style),
        LintRule("no-empty-url", links.no_empty_url),
        LintRule("no-literal-urls", links.no_literal_urls),
        LintRule("no-reference-like-url", links.no_reference_like_url),
        LintRule("no-shortcut-reference-link", links.no_shortcut_reference_link),

        # Block structure
        LintRule("no-missing-blank-lines", blocks.no_missing_blank_lines,
                 blocks.configure_missing_blank_lines),
        LintRule("list-item-spacing", blocks.list_item_spacing,
                 blocks.configure_list_item_spacing),
        LintRule("blockquote-indentation", blocks.blockquote_indentation,
                 blocks.configure_blockquote_indentation),
        LintRule("no-html", blocks.no_html),

        # Markers
        LintRule("rule-style", markers.rule_style, markers.configure_rule_style),
        LintRule("strikethrough-marker", markers.strikethrough_marker,
                 markers.configure_strikethrough_marker),

        # Whole file
        LintRule("final-newline", document.final_newline),
    ]
}

__all__ = ["RULES", "blocks", "definitions", "document", "headings", "links", "markers"]
