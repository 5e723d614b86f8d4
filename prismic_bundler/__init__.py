"""
Top-level package for the Markdown → Prismic bundle utility.

This package bundles all components required to read Markdown files with
front matter, convert them into Prismic import documents, embed their
images and write the ZIP archive accepted by Prismic's import.  Modules are
split into subpackages:

* :mod:`prismic_bundler.extractors` – front matter parsing of source files
* :mod:`prismic_bundler.parsers` – Markdown to Prismic rich text converters
* :mod:`prismic_bundler.bundlers` – field mapping, media and ID reconciliation
* :mod:`prismic_bundler.models` – field specs and Prismic value shapes
* :mod:`prismic_bundler.utils` – errors, reports, slugs and the run manifest

Each layer has no direct knowledge of configuration or execution strategy;
orchestration is handled in :mod:`prismic_bundler.bundle_tool`.
"""

__version__ = "0.1.0"
