"""Output formatters for the sitemap CLI."""
