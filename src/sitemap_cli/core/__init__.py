"""Sitemap generation core: records, renderers, batching, writing, indexing."""
